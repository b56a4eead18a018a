import numpy as np
import pandas as pd
import plotly.graph_objects as go

from freelance import FreelanceResult
from payroll import PayrollResult, WorkerClass, compute_deductions, PayrollInput

LAYOUT = dict(hovermode="x unified", margin=dict(l=30, r=20, t=60, b=30))


def net_salary_curve(birth_date, worker_class: WorkerClass, max_salary: float, points: int = 200) -> pd.DataFrame:
    """
    Net salary and deductions for gross salaries from 0 to max_salary.
    The ISR kinks show up at 11,000/12 and 50,000/12 per month.
    """
    gross = np.linspace(0.0, max(max_salary, 1.0), points)
    rows = [compute_deductions(PayrollInput(birth_date, float(g), worker_class)) for g in gross]
    df = pd.DataFrame({
        "gross": gross,
        "net": [r.net_salary for r in rows],
        "css": [r.css_amount for r in rows],
        "income_tax": [r.income_tax_amount for r in rows],
        "education": [r.education_amount for r in rows],
    })
    safe_gross = df["gross"].replace(0.0, np.nan)
    df["effective_rate_pct"] = ((1 - df["net"] / safe_gross) * 100).fillna(0.0)
    return df


def deductions_pie(result: PayrollResult) -> go.Figure:
    labels = ["Salario neto", "CSS", "Impuesto sobre la Renta", "Seguro Educativo"]
    values = [max(result.net_salary, 0.0), result.css_amount, result.income_tax_amount, result.education_amount]
    fig = go.Figure(go.Pie(labels=labels, values=values, hole=0.45, sort=False))
    fig.update_layout(title="¿A dónde va tu salario?", margin=LAYOUT["margin"])
    return fig


def net_curve_figure(curve: pd.DataFrame, current_gross: float) -> go.Figure:
    fig = go.Figure()
    # deductions stack up from zero under the net line
    for col, name in [("css", "CSS"), ("income_tax", "Impuesto sobre la Renta"), ("education", "Seguro Educativo")]:
        fig.add_trace(go.Scatter(x=curve["gross"], y=curve[col], mode="lines", name=name,
                                 stackgroup="deductions", line=dict(width=0.5)))
    fig.add_trace(go.Scatter(x=curve["gross"], y=curve["net"], mode="lines", name="Salario neto"))
    fig.add_trace(go.Scatter(x=curve["gross"], y=curve["gross"], mode="lines", name="Sin deducciones",
                             line=dict(dash="dot")))
    fig.add_vline(x=current_gross, line_dash="dash", line_color="green")
    fig.update_layout(title="Salario neto según salario bruto (mensual)",
                      xaxis_title="Salario bruto", yaxis_title="$ por mes", **LAYOUT)
    return fig


def freelance_breakdown(result: FreelanceResult) -> go.Figure:
    """Where the gross annual income goes: expenses, taxes, net."""
    fig = go.Figure(go.Waterfall(
        orientation="v",
        measure=["absolute", "relative", "relative", "total"],
        x=["Ingreso bruto", "Gastos", "Impuestos", "Ingreso neto"],
        y=[result.gross_annual_income, -result.annual_expenses, -result.annual_taxes, 0],
    ))
    fig.update_layout(title="Del ingreso bruto al neto (anual)", yaxis_title="$ por año",
                      margin=LAYOUT["margin"], showlegend=False)
    return fig


def scenario_bars(results: dict) -> go.Figure:
    names = list(results.keys())
    fig = go.Figure(go.Bar(x=names, y=[r.hourly_rate for r in results.values()],
                           text=[f"${r.hourly_rate:,.2f}" for r in results.values()], textposition="auto"))
    fig.update_layout(title="Tarifa por hora por escenario", yaxis_title="$ por hora", margin=LAYOUT["margin"])
    return fig
