# Contribution profiles for freelancers: (ISR %, CSS %, seguro educativo %).
# An ISR of 15 selects the progressive DGI table; other values are applied flat
# above the $11,000 exemption.

RATE_PRESETS = {
    "DGI progresivo (predeterminado)": {"income_tax": 15.0, "social_security": 7.25, "education_insurance": 1.25},
    "IVM obligatorio 9.36%": {"income_tax": 15.0, "social_security": 9.36, "education_insurance": 1.25},
    "IVM + E&M voluntario (17.86%)": {"income_tax": 15.0, "social_security": 17.86, "education_insurance": 1.25},
    "Sin deducciones legales": {"income_tax": 0.0, "social_security": 0.0, "education_insurance": 0.0},
}


def apply_preset(values: dict, name: str) -> dict:
    out = dict(values)
    out.update(RATE_PRESETS[name])
    return out
