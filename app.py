# app.py
import logging
from dataclasses import asdict
from datetime import date

import streamlit as st

from charts import deductions_pie, freelance_breakdown, net_curve_figure, net_salary_curve, scenario_bars
from config import APP_NAME, LOG_LEVEL, SOLVER_MAX_ITERATIONS, SOLVER_METHOD
from expenses import EXPENSE_CATEGORIES, expense_table
from exporters import export_deductions, export_freelance, export_inputs
from formatters import age_on, format_currency, format_date, format_number, format_percent
from freelance import FREELANCE_TOLERANCE, FreelanceInput
from payroll import (GROSS_SALARY_TOLERANCE, EstimationInput, PayrollInput, WorkerClass, compute_deductions,
                     estimate_gross_salary)
from presets import RATE_PRESETS, apply_preset
from scenarios import compare
from session import (DEDUCTION_KEY, FREELANCE_KEY, load_inputs, reset_inputs,
                     save_inputs)
from solver import SolverSettings
from ui import header, helptext, inject_css, kpi, print_button, rate_warning

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PAYROLL_SETTINGS = SolverSettings(GROSS_SALARY_TOLERANCE, SOLVER_MAX_ITERATIONS, SOLVER_METHOD)
FREELANCE_SETTINGS = SolverSettings(FREELANCE_TOLERANCE, SOLVER_MAX_ITERATIONS, SOLVER_METHOD)

# ------------- Page setup -------------
st.set_page_config(page_title=APP_NAME, page_icon="🇵🇦", layout="wide")
inject_css()
header(APP_NAME, "Tarifas por hora para independientes y deducciones salariales, tasas 2025.")

tab_rates, tab_deductions = st.tabs(["💼 Tarifas Freelance", "🧾 Deducciones"])


# ------------- Freelance rates -------------
def freelance_tab():
    values = load_inputs(st.session_state, FREELANCE_KEY)

    if st.button("Restablecer valores", key="reset_freelance"):
        values = reset_inputs(st.session_state, FREELANCE_KEY)

    st.markdown("### 1) Meta de ingresos")
    helptext("Los gastos son deducibles: necesitas ingreso para cubrirlos y, después de impuestos, quedarte con tu meta.")
    c1, c2 = st.columns([1, 2])
    period = c1.radio("Meta expresada en", ["Anual", "Mensual"], horizontal=True)
    if period == "Anual":
        values["annual_income"] = c2.number_input("Ingreso anual deseado (neto)", min_value=0.0,
                                                  value=float(values["annual_income"]), step=1000.0)
        c2.caption(f"Equivale a {format_currency(values['annual_income'] / 12)} al mes")
    else:
        monthly = c2.number_input("Ingreso mensual deseado (neto)", min_value=0.0,
                                  value=round(values["annual_income"] / 12, 2), step=100.0)
        values["annual_income"] = monthly * 12
        c2.caption(f"Equivale a {format_currency(values['annual_income'])} al año")

    st.markdown("### 2) Gastos del negocio (mensuales)")
    cols = st.columns(3)
    for i, (key, label) in enumerate(EXPENSE_CATEGORIES):
        with cols[i % 3]:
            values[key] = st.number_input(label, min_value=0.0, value=float(values[key]), step=25.0)
    st.caption(f"Total mensual: {format_currency(sum(values[k] for k, _ in EXPENSE_CATEGORIES))}")

    st.markdown("### 3) Impuestos y contribuciones")
    preset = st.selectbox("Perfil de tasas (opcional)", ["Personalizado"] + list(RATE_PRESETS.keys()))
    if preset != "Personalizado":
        values = apply_preset(values, preset)
    cols = st.columns(3)
    values["income_tax"] = cols[0].number_input(
        "Impuesto sobre la Renta (%)", value=float(values["income_tax"]), step=0.5,
        help="15 o 25 usan la tabla progresiva de la DGI; otro valor se aplica fijo sobre el exceso de $11,000.")
    values["social_security"] = cols[1].number_input(
        "Seguro Social CSS (%)", value=float(values["social_security"]), step=0.25)
    values["education_insurance"] = cols[2].number_input(
        "Seguro Educativo (%)", value=float(values["education_insurance"]), step=0.25)
    for name, field in [("ISR", "income_tax"), ("CSS", "social_security"), ("Seguro Educativo", "education_insurance")]:
        rate_warning(name, values[field])

    st.markdown("### 4) Horario de trabajo")
    cols = st.columns(3)
    values["hours_per_week"] = cols[0].number_input("Horas por semana", min_value=0.0, max_value=168.0,
                                                    value=float(values["hours_per_week"]), step=1.0)
    values["weeks_per_year"] = cols[1].number_input("Semanas de trabajo al año", min_value=0.0, max_value=52.0,
                                                    value=float(values["weeks_per_year"]), step=1.0)
    values["vacation_days"] = cols[2].number_input("Días de vacaciones", min_value=0.0, max_value=365.0,
                                                   value=float(values["vacation_days"]), step=1.0)

    save_inputs(st.session_state, FREELANCE_KEY, values)
    inp = FreelanceInput(**values)
    results = compare(inp, settings=FREELANCE_SETTINGS)
    with_deductions = st.toggle("Incluir deducciones legales", value=True)
    shown = results["Con deducciones"] if with_deductions else results["Sin deducciones legales"]

    st.markdown("### Resultado")
    c1, c2, c3 = st.columns(3)
    if with_deductions:
        note = f"Sin deducciones: {format_currency(results['Sin deducciones legales'].hourly_rate)}"
    else:
        note = "sin deducciones legales"
    kpi(c1, "Tarifa por hora recomendada", shown.hourly_rate, note)
    kpi(c2, "Ingreso neto anual", shown.net_annual_income)
    c3.markdown(f"<div class='card'><div class='caption'>Horas facturables por año</div>"
                f"<div class='kpi'>{format_number(shown.billable_hours)}</div></div>", unsafe_allow_html=True)
    if shown.billable_hours <= 0:
        st.warning("Las vacaciones superan las horas de trabajo: no hay horas facturables.")
    if not shown.converged:
        st.info("El cálculo no convergió por completo; el resultado es una aproximación.")

    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(freelance_breakdown(shown), use_container_width=True)
    with c2:
        st.plotly_chart(scenario_bars(results), use_container_width=True)

    st.markdown(
        f"- Ingreso bruto anual: **{format_currency(shown.gross_annual_income)}**\n"
        f"- Gastos anuales: **-{format_currency(shown.annual_expenses)}**\n"
        f"- Impuestos estimados: **-{format_currency(shown.annual_taxes)}**\n"
        f"- Ingreso gravable: **{format_currency(shown.taxable_income)}**"
    )
    if with_deductions and shown.tax_savings_from_expenses > 0:
        st.success(f"Ahorro fiscal por gastos deducibles: {format_currency(shown.tax_savings_from_expenses)} al año")

    with st.expander("Detalle de gastos"):
        st.dataframe(expense_table(inp), use_container_width=True, hide_index=True)

    c1, c2, c3 = st.columns([2, 2, 1])
    name_csv, data_csv = export_freelance(inp, shown)
    c1.download_button("⬇️ Exportar (CSV)", data_csv, file_name=name_csv, mime="text/csv", key="csv_freelance")
    name_json, data_json = export_inputs(values, "freelance-inputs")
    c2.download_button("⬇️ Guardar entradas (JSON)", data_json, file_name=name_json, mime="application/json",
                       key="json_freelance")
    with c3:
        print_button(key="print_freelance")


# ------------- Deductions -------------
def deductions_tab():
    values = load_inputs(st.session_state, DEDUCTION_KEY)

    if st.button("Restablecer valores", key="reset_deductions"):
        values = reset_inputs(st.session_state, DEDUCTION_KEY)

    mode = st.radio("¿Qué quieres calcular?", ["Deducciones de mi salario bruto", "Salario bruto para un neto deseado"],
                    index=1 if values["estimation_mode"] else 0, horizontal=True)
    values["estimation_mode"] = mode.startswith("Salario bruto")

    c1, c2, c3 = st.columns(3)
    values["birth_date"] = c1.date_input("Fecha de nacimiento", value=values["birth_date"],
                                         min_value=date(1920, 1, 1), max_value=date.today(), format="DD/MM/YYYY")
    label = "Salario neto deseado (mensual)" if values["estimation_mode"] else "Salario bruto mensual"
    values["monthly_salary"] = c2.number_input(label, min_value=0.0, value=float(values["monthly_salary"]), step=100.0)
    worker = c3.radio("Tipo de trabajador", ["Asalariado", "Independiente"],
                      index=1 if values["is_independent"] else 0, horizontal=True)
    values["is_independent"] = worker == "Independiente"
    save_inputs(st.session_state, DEDUCTION_KEY, values)

    if values["monthly_salary"] <= 0:
        st.info("Ingresa un salario mayor que cero para ver el cálculo.")
        return

    worker_class = WorkerClass.from_flag(values["is_independent"])
    if values["estimation_mode"]:
        result = estimate_gross_salary(EstimationInput(values["birth_date"], values["monthly_salary"], worker_class),
                                       PAYROLL_SETTINGS)
        gross = result.estimated_gross_salary
    else:
        result = compute_deductions(PayrollInput(values["birth_date"], values["monthly_salary"], worker_class))
        gross = values["monthly_salary"]

    st.caption(f"Fecha de nacimiento: {format_date(values['birth_date'])} "
               f"({age_on(values['birth_date'])} años) · "
               + ("Cotiza a la CSS (nacido desde el 1/1/1972, Ley 51 de 2005)" if result.is_css_eligible
                  else "Exento de CSS (nacido antes del 1/1/1972)"))

    c1, c2, c3 = st.columns(3)
    if values["estimation_mode"]:
        kpi(c1, "Salario bruto estimado", result.estimated_gross_salary)
    else:
        kpi(c1, "Salario bruto", gross)
    kpi(c2, "Total deducciones", result.total_deductions)
    kpi(c3, "Salario neto mensual", result.net_salary)

    rows = []
    if result.is_css_eligible:
        rows.append({"Deducción": "CSS (Seguro Social)", "Monto": format_currency(result.css_amount),
                     "Porcentaje": format_percent(result.css_rate)})
    if result.income_tax_amount > 0:
        rows.append({"Deducción": "Impuesto sobre la Renta", "Monto": format_currency(result.income_tax_amount),
                     "Porcentaje": format_percent(result.income_tax_rate)})
    rows.append({"Deducción": "Seguro Educativo", "Monto": format_currency(result.education_amount),
                 "Porcentaje": format_percent(result.education_rate)})
    st.table(rows)

    with st.expander("Tasas 2025 (Ley 462 de 2025)"):
        st.write("""
**Asalariados:** CSS 9.75% (obligatorio) + Seguro Educativo 1.25% = 11%.

**Independientes:** IVM 9.36% (obligatorio) + Seguro Educativo 1.25% = 10.61%.
E&M 8.5% es voluntario y no se incluye en el cálculo.

**ISR:** exento hasta $11,000 anuales; 15% sobre el exceso hasta $50,000; 25% sobre el exceso de $50,000.
        """)

    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(deductions_pie(result), use_container_width=True)
    with c2:
        curve = net_salary_curve(values["birth_date"], worker_class, max(gross * 2, 5000.0))
        st.plotly_chart(net_curve_figure(curve, gross), use_container_width=True)

    c1, c2, c3 = st.columns([2, 2, 1])
    name_csv, data_csv = export_deductions(values["birth_date"], values["monthly_salary"], result,
                                           estimation_mode=values["estimation_mode"])
    c1.download_button("⬇️ Exportar (CSV)", data_csv, file_name=name_csv, mime="text/csv", key="csv_deductions")
    name_json, data_json = export_inputs({**values, "result": asdict(result)}, "deductions-inputs")
    c2.download_button("⬇️ Guardar entradas (JSON)", data_json, file_name=name_json, mime="application/json",
                       key="json_deductions")
    with c3:
        print_button(key="print_deductions")


with tab_rates:
    freelance_tab()

with tab_deductions:
    deductions_tab()

st.markdown("---")
st.caption("Cálculos estimados con tasas 2025 simplificadas. Es una herramienta de planificación, no asesoría fiscal.")
