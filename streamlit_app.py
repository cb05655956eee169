import streamlit as st
import matplotlib.pyplot as plt

from calcsolver_pkg.capabilities import sympy_capabilities
from calcsolver_pkg.config import KEYBOARD_SYMBOLS
from calcsolver_pkg.config import LOG_LEVEL
from calcsolver_pkg.dispatch import Solver
from calcsolver_pkg.logging_config import setup_logging
from calcsolver_pkg.parser import parse_expression
from calcsolver_pkg.types import RequestKind
from calcsolver_pkg.types import SolverError
from calcsolver_pkg.utils.formatting import format_superscript
from calcsolver_pkg.utils.numeric import sample_curves

setup_logging(level=LOG_LEVEL)

# Page config
st.set_page_config(
    page_title="Calculus Equation Solver",
    page_icon="∫",
    layout="centered"
)

st.markdown("""
<style>
    .stButton>button {
        border-radius: 7px;
        min-width: 50px;
        font-size: 1.1rem;
    }
</style>
""", unsafe_allow_html=True)

st.title("Calculus Equation Solver")

# --- SIDEBAR ---
with st.sidebar:
    st.header("Settings")
    simplify_enabled = st.checkbox("Simplify results", value=True)
    pretty = st.checkbox("Superscript exponents", value=False)
    show_plot = st.checkbox("Plot integrals", value=True)
    plot_range = st.slider("Plot range", -10.0, 10.0, (0.1, 5.0), step=0.1)

if "calc_input" not in st.session_state:
    st.session_state.calc_input = ""


def insert_symbol(symbol):
    # Streamlit has no cursor position, so symbols are appended
    st.session_state.calc_input = st.session_state.calc_input + symbol


st.text_input(
    "Enter calculus equation",
    key="calc_input",
    placeholder="e.g. ∫ x^2 dx or d/dx x^2",
)

# --- KEYBOARD ---
with st.expander("Symbols", expanded=True):
    columns = st.columns(8)
    for i, (label, value) in enumerate(KEYBOARD_SYMBOLS):
        columns[i % len(columns)].button(
            label, key=f"sym_{i}", on_click=insert_symbol, args=(value,)
        )

# --- ACTION ---
if st.button("Solve", type="primary"):
    solver = Solver(sympy_capabilities(simplify_enabled=simplify_enabled))
    result = solver.solve(st.session_state.calc_input)

    if not result.ok:
        st.error(result.text)
    else:
        st.success(format_superscript(result.text) if pretty else result.text)
        st.code(result.text, language="text")

        request = result.request
        if show_plot and request.kind is RequestKind.INTEGRAL:
            try:
                body = parse_expression(request.body)
                antiderivative = parse_expression(result.text)
                xs, body_ys, result_ys = sample_curves(
                    body, antiderivative, request.variable, x_range=plot_range
                )

                fig, ax = plt.subplots(figsize=(8, 4))
                ax.plot(xs, body_ys, color='red', label=f"f = {request.body}", linewidth=2)
                ax.plot(xs, result_ys, color='blue', label=f"∫f d{request.variable} = {result.text}", linewidth=2)
                ax.grid(True, alpha=0.3)
                ax.legend()
                ax.set_xlabel(request.variable)
                ax.set_title("Integrand vs antiderivative")
                st.pyplot(fig)
            except (SolverError, ValueError) as e:
                st.info(f"Plot not available: {e}")
