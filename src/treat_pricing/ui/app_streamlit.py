"""
Streamlit UI for Treat Pricing.

Features:
- Quote builder with a session cart
- Evaluation date picker to preview sales
- Catalog browser with bulk and sale offers
"""
import streamlit as st
import pandas as pd
from datetime import date

from treat_pricing.config.settings import get_settings
from treat_pricing.data.catalog_loader import catalog_frame, load_catalog
from treat_pricing.engine import PricingEngine


st.set_page_config(
    page_title="Treat Pricing",
    layout="wide",
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    settings = get_settings()
    return PricingEngine(load_catalog(settings.catalog_path, key=settings.catalog_key))


try:
    engine = get_engine()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SIDEBAR: Evaluation date
# ============================================================================
with st.sidebar:
    st.header("📅 Pricing Date")
    on = st.date_input("Evaluate on", value=date.today())
    st.caption(f"{on:%A, %B %d}")

    active_sales = [item.name for item in engine.items if item.sale and item.sale.date.matches(on)]
    if active_sales:
        st.success("Sales today: " + ", ".join(active_sales))
    else:
        st.info("No sales on this date")


st.title("Treat Pricing")

tab1, tab2 = st.tabs(["⚡ Quote Builder", "📚 Catalog"])


# ============================================================================
# TAB 1: QUOTE
# ============================================================================
with tab1:
    if 'cart' not in st.session_state:
        st.session_state.cart = {}

    col1, col2 = st.columns([1.5, 1.5], gap="large")

    with col1:
        st.subheader("Add Items")
        with st.container(border=True):
            names = [item.name for item in engine.items]
            selected = st.selectbox("Treat", options=names)
            quantity = st.number_input("Qty", min_value=0, value=1, step=1)

            if st.button("➕ Set Quantity", type="primary"):
                st.session_state.cart[selected] = int(quantity)
                st.rerun()

            if st.button("🗑️ Clear Cart"):
                st.session_state.cart = {}
                st.rerun()

    with col2:
        st.subheader("Quote Summary")
        with st.container(border=True):
            if st.session_state.cart:
                result = engine.calculate(st.session_state.cart, on)

                m1, m2 = st.columns(2)
                m1.metric("Total", f"${result.total:,.2f}")
                m2.metric("Items", sum(st.session_state.cart.values()))

                for warning in result.warnings:
                    st.warning(warning)

                lines_df = pd.DataFrame([{
                    'Treat': line.name,
                    'Quantity': line.quantity,
                    'Unit Price': line.unit_price,
                    'Rule': line.rule_applied,
                    'Total': line.extended_price,
                } for line in result.lines])
                st.dataframe(lines_df, hide_index=True, use_container_width=True)

                with st.expander("🔍 Pricing Trace"):
                    for line in result.lines:
                        st.markdown(f"**{line.name}**")
                        st.text(line.get_trace_text())
            else:
                st.info("Cart is empty")


# ============================================================================
# TAB 2: CATALOG
# ============================================================================
with tab2:
    search = st.text_input("Search", placeholder="Name or sale...")
    df = catalog_frame(engine.items)
    if search:
        mask = (
            df.index.str.contains(search, case=False, na=False) |
            df['Sale'].fillna('').str.contains(search, case=False)
        )
        df = df[mask]
    st.dataframe(df.drop(columns=['Image']), use_container_width=True)
