import pandas as pd

# (field on FreelanceInput, label shown in the UI / export)
EXPENSE_CATEGORIES = [
    ("office_rent", "Alquiler de Oficina"),
    ("equipment", "Equipos y Software"),
    ("insurance", "Seguros"),
    ("marketing", "Marketing y Publicidad"),
    ("training", "Capacitación y Desarrollo"),
    ("other_expenses", "Otros Gastos"),
]


def monthly_expenses(inp) -> float:
    return sum(getattr(inp, key) for key, _ in EXPENSE_CATEGORIES)


def annual_expenses(inp) -> float:
    return monthly_expenses(inp) * 12


def expense_table(inp) -> pd.DataFrame:
    """
    One row per deductible expense category with monthly and annual amounts.
    share_pct is the category's share of total expenses (0 when there are none).
    """
    df = pd.DataFrame(
        [{"category": key, "label": label, "monthly": float(getattr(inp, key))}
         for key, label in EXPENSE_CATEGORIES]
    )
    df["annual"] = df["monthly"] * 12
    total = df["monthly"].sum()
    df["share_pct"] = (df["monthly"] / total * 100) if total > 0 else 0.0
    return df
