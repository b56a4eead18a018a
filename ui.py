import streamlit as st
import streamlit.components.v1 as components

from formatters import format_currency


def inject_css():
    try:
        with open("assets/styles.css", "r", encoding="utf-8") as f:
            st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        pass


def header(title: str, subtitle: str = ""):
    st.markdown(f"## {title}")
    if subtitle:
        st.caption(subtitle)


def helptext(text: str):
    st.caption(text)


def kpi(col, caption: str, amount: float, note: str = ""):
    html = (f"<div class='card'><div class='caption'>{caption}</div>"
            f"<div class='kpi'>{format_currency(amount)}</div>")
    if note:
        html += f"<div class='caption'>{note}</div>"
    col.markdown(html + "</div>", unsafe_allow_html=True)


def print_button(label: str = "🖨️ Imprimir", key: str = "print"):
    # the component lives in an iframe; print the parent page
    if st.button(label, key=key):
        components.html("<script>window.parent.print();</script>", height=0)


def rate_warning(name: str, value: float):
    if not 0 <= value <= 100:
        st.warning(f"{name}: {value}% está fuera del rango 0–100%. El cálculo continúa, revisa el valor.")
