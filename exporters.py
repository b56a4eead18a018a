# exporters.py
import json
from datetime import date, datetime
from enum import Enum

import pandas as pd

from expenses import EXPENSE_CATEGORIES
from formatters import format_currency, format_date, format_number, format_percent


def _to_csv(rows: list) -> bytes:
    # sections have different widths; pad so every row has the same columns
    width = max(len(r) for r in rows)
    df = pd.DataFrame([list(r) + [""] * (width - len(r)) for r in rows])
    return df.to_csv(index=False, header=False).encode("utf-8")


def _stamp(now: datetime) -> str:
    return now.strftime("%d/%m/%Y %H:%M")


def export_deductions(birth_date: date, entered_salary: float, result, estimation_mode: bool = False,
                      now: datetime = None) -> tuple[str, bytes]:
    """
    CSV for the deductions tab. In estimation mode `entered_salary` is the
    desired net and `result` an EstimationResult.
    """
    now = now or datetime.now()
    rows = [
        ["Calculadora de Deducciones - Panama"],
        [f"Fecha: {_stamp(now)}"],
        [],
        ["Campo", "Valor"],
        ["Fecha de Nacimiento", format_date(birth_date)],
    ]
    if estimation_mode:
        rows.append(["Salario Neto Deseado", format_currency(entered_salary)])
        rows.append(["Salario Bruto Estimado", format_currency(result.estimated_gross_salary)])
    else:
        rows.append(["Salario Mensual Bruto", format_currency(entered_salary)])
    rows.append(["Elegible para CSS", "Si" if result.is_css_eligible else "No"])
    rows.append([])

    rows.append(["Deducciones", "Monto", "Porcentaje"])
    if result.is_css_eligible:
        rows.append(["CSS (Seguro Social)", format_currency(result.css_amount), format_percent(result.css_rate)])
    if result.income_tax_amount > 0:
        rows.append(["Impuesto sobre la Renta", format_currency(result.income_tax_amount),
                     format_percent(result.income_tax_rate)])
    rows.append(["Seguro Educativo", format_currency(result.education_amount),
                 format_percent(result.education_rate)])
    rows.append(["Total Deducciones", format_currency(result.total_deductions), ""])
    rows.append(["Salario Neto Mensual", format_currency(result.net_salary), ""])

    return f"deductions-calculation-{now.date().isoformat()}.csv", _to_csv(rows)


def export_freelance(inp, result, now: datetime = None) -> tuple[str, bytes]:
    now = now or datetime.now()
    rows = [
        ["Calculadora de Tarifas Freelance - Panama"],
        [f"Fecha: {_stamp(now)}"],
        [],
        ["Configuracion de Entrada", "Valor"],
        ["Ingreso Anual Deseado", format_currency(inp.annual_income)],
        ["Ingreso Mensual Deseado", format_currency(inp.annual_income / 12)],
    ]
    for key, label in EXPENSE_CATEGORIES:
        rows.append([f"{label} (Mensual)", format_currency(getattr(inp, key))])
    rows += [
        ["Impuesto sobre la Renta", format_percent(inp.income_tax)],
        ["Seguro Social CSS", format_percent(inp.social_security)],
        ["Seguro Educativo", format_percent(inp.education_insurance)],
        ["Horas por Semana", format_number(inp.hours_per_week)],
        ["Semanas de Trabajo al Año", format_number(inp.weeks_per_year)],
        ["Dias de Vacaciones", format_number(inp.vacation_days)],
        [],
        ["Resultados del Calculo", "Valor"],
        ["Tarifa por Hora Recomendada", format_currency(result.hourly_rate)],
        ["Ingreso Bruto Anual", format_currency(result.gross_annual_income)],
        ["Gastos Anuales", format_currency(result.annual_expenses)],
        ["Impuestos Estimados", format_currency(result.annual_taxes)],
        ["Ingreso Neto Anual", format_currency(result.net_annual_income)],
        ["Horas Facturables por Año", format_number(result.billable_hours)],
    ]
    return f"freelance-calculation-{now.date().isoformat()}.csv", _to_csv(rows)


def _json_default(o):
    if isinstance(o, (date, datetime)):
        return o.isoformat()
    if isinstance(o, Enum):
        return o.value
    # Let json raise for anything else unexpected
    raise TypeError(f"Object of type {o.__class__.__name__} is not JSON serializable")


def export_inputs(inputs: dict, name: str = "inputs") -> tuple[str, bytes]:
    """Export the current inputs to JSON (dates as ISO strings)."""
    blob = json.dumps(inputs, indent=2, default=_json_default, ensure_ascii=False)
    return f"{name}.json", blob.encode("utf-8")
