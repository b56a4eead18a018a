import os
from datetime import date
from dotenv import load_dotenv

load_dotenv()

APP_NAME = "Calculadora Panamá: Tarifas Freelance y Deducciones"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Root finder (shared by the gross salary estimator and the freelance solver)
SOLVER_METHOD = os.getenv("SOLVER_METHOD", "fixed_point")   # or "bisection"
SOLVER_MAX_ITERATIONS = int(os.getenv("SOLVER_MAX_ITERATIONS", "50"))

# 2025 legal constants
CSS_ELIGIBILITY_DATE = date(1972, 1, 1)   # Ley 51 de 2005
CSS_RATE_EMPLOYEE = 9.75                  # Ley 462 de 2025
CSS_RATE_INDEPENDENT = 9.36               # IVM obligatorio
EDUCATION_RATE = 1.25                     # seguro educativo

DEFAULTS = {
    "deductions": {
        "birth_date": date(1990, 1, 1),
        "monthly_salary": 3000.0,
        "is_independent": False,
        "estimation_mode": False,
    },

    # Freelance (monthly expenses, percentages, schedule)
    "freelance": {
        "annual_income": 50_000.0,    # desired NET income
        "office_rent": 800.0,
        "equipment": 200.0,
        "insurance": 150.0,
        "marketing": 300.0,
        "training": 100.0,
        "other_expenses": 200.0,
        "income_tax": 15.0,           # 15 or 25 -> progressive DGI table
        "social_security": 7.25,
        "education_insurance": 1.25,
        "hours_per_week": 40.0,
        "weeks_per_year": 50.0,
        "vacation_days": 14.0,
    },
}
