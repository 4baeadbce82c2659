"""
Main Streamlit application for the Pay Period Planner.
"""
import asyncio
import logging
import os
import sys
from datetime import date

import pandas as pd
import plotly.express as px
import streamlit as st

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import AppConfig
from app.company_lookup import CompanyLookupClient
from app.logos import logo_url
from app.utils import (
    format_currency, format_month, format_period_range, period_bill_rows, suggestion_rows
)
from budget.models import (
    Bill, BillStatus, CreditCard, PaymentMethod, RecurrenceFrequency
)
from budget.periods import month_key, shift_month
from budget.planner import BudgetPlanner
from db.repositories import Repositories
from db.store import create_document_store

logger = logging.getLogger(__name__)


# Page configuration
st.set_page_config(
    page_title="Pay Period Planner",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'config' not in st.session_state:
    st.session_state.config = AppConfig.from_env()
    logging.basicConfig(
        level=st.session_state.config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
if 'planner' not in st.session_state:
    config = st.session_state.config
    store = create_document_store(
        config.store_backend,
        database_url=config.database_url,
        supabase_url=config.supabase_url,
        supabase_key=config.supabase_key,
    )
    logger.info(f"Using {config.store_backend} document store")
    st.session_state.planner = BudgetPlanner(Repositories(store))
if 'company_suggestions' not in st.session_state:
    st.session_state.company_suggestions = {}
if 'current_month' not in st.session_state:
    st.session_state.current_month = date.today().replace(day=1)


def lookup_companies(query: str):
    """Company suggestions for a search, remembered for the session."""
    cache = st.session_state.company_suggestions
    if query not in cache:
        config = st.session_state.config
        client = CompanyLookupClient(config.company_lookup_url, timeout=config.http_timeout_seconds)
        cache[query] = [s.model_dump() for s in asyncio.run(client.suggest(query))]
    return cache[query]


def show_dashboard_page(planner: BudgetPlanner):
    """Show the two pay periods of the selected month."""
    current_month = st.session_state.current_month

    col_prev, col_title, col_next = st.columns([1, 4, 1])
    with col_prev:
        if st.button("◀ Previous"):
            st.session_state.current_month = shift_month(current_month, -1)
            st.rerun()
    with col_title:
        st.header(format_month(current_month))
    with col_next:
        if st.button("Next ▶"):
            st.session_state.current_month = shift_month(current_month, 1)
            st.rerun()

    periods = planner.pay_periods(current_month)
    settings = planner.repos.debt_state.load().settings
    key = month_key(current_month)

    for column, period in zip(st.columns(2), periods):
        with column:
            st.subheader(format_period_range(period))

            label = "Income" if period.estimated_income is None else "Estimated Income"
            with st.form(f"income_form_{key}_{period.index}"):
                income_text = st.text_input(label, value=f"{period.available_income:.2f}")
                if st.form_submit_button("Save"):
                    if planner.set_income(current_month, period.index, income_text):
                        st.rerun()
                    else:
                        st.error("Please enter a valid amount.")

            if period.bills:
                st.dataframe(pd.DataFrame(period_bill_rows(period)), use_container_width=True, hide_index=True)
            else:
                st.info("No bills in this period.")

            for bill in period.bills:
                status = planner.bill_status(bill.id, key)
                widget_key = f"{key}_{period.index}_{bill.id}"
                if bill.is_credit_card:
                    show_card_payment(planner, bill.id, bill.name, bill.amount, key, status, widget_key)
                else:
                    paid = st.checkbox(f"{bill.name} paid", value=status == BillStatus.PAID, key=widget_key)
                    new_status = BillStatus.PAID if paid else BillStatus.UNPAID
                    if new_status != status:
                        planner.set_bill_status(bill.id, key, new_status)

            st.metric("Total Bills", format_currency(period.total_bills))
            st.metric("Remaining (Variable)", format_currency(period.remaining))

            suggestions = planner.payment_suggestions(period)
            if period.remaining > settings.variable_threshold and suggestions:
                st.markdown("**Suggested Debt Payments**")
                st.dataframe(pd.DataFrame(suggestion_rows(suggestions)), use_container_width=True, hide_index=True)


def show_card_payment(planner: BudgetPlanner, card_id: str, name: str, amount: float,
                      key: str, status: BillStatus, widget_key: str):
    """Pay or undo a credit card payment for the month."""
    col_amount, col_action = st.columns([2, 1])
    if status == BillStatus.PAID:
        with col_amount:
            st.write(f"✅ {name} paid")
        with col_action:
            if st.button("Undo", key=f"undo_{widget_key}"):
                planner.toggle_credit_card_payment(card_id, key, BillStatus.UNPAID)
                st.rerun()
    else:
        with col_amount:
            payment_text = st.text_input(f"{name} payment", value=f"{amount:.2f}", key=f"amount_{widget_key}")
        with col_action:
            if st.button("Pay", key=f"pay_{widget_key}"):
                if planner.toggle_credit_card_payment(card_id, key, BillStatus.PAID, payment_text):
                    st.rerun()
                else:
                    st.error("Payment not recorded. Check the amount.")


def show_bills_page(planner: BudgetPlanner):
    """Show bills with forecasts and the add bill form."""
    st.header("📅 Bills")
    config = st.session_state.config
    bills = planner.bills()

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("Your Bills")
        if bills:
            bill_data = [{
                "Logo": logo_url(bill, config.logo_base_url),
                "Name": bill.name,
                "Amount": format_currency(bill.amount),
                "Due Date": bill.due_date.strftime("%Y-%m-%d"),
                "Recurring": "🔁" if bill.is_recurring else "",
                "AutoPay": "⚡" if bill.is_auto_pay else "",
                "Method": bill.payment_method.value.title(),
            } for bill in bills]
            st.dataframe(
                pd.DataFrame(bill_data),
                use_container_width=True,
                hide_index=True,
                column_config={"Logo": st.column_config.ImageColumn("Logo")}
            )
        else:
            st.info("No bills added yet.")

        recurring = [b for b in bills if b.is_recurring]
        if recurring:
            st.subheader("Monthly Forecasts")
            selected = st.selectbox("Bill", options=recurring, format_func=lambda b: b.name)
            for forecast in selected.forecasts or []:
                st.write(f"{forecast.month}: {format_currency(forecast.estimated_amount)}")
            with st.form("forecast_form"):
                forecast_month = st.text_input("Month (YYYY-MM)", value=month_key(st.session_state.current_month))
                forecast_amount = st.text_input("Estimated Amount", value=f"{selected.amount:.2f}")
                if st.form_submit_button("Save Forecast"):
                    if planner.set_forecast(selected.id, forecast_month, forecast_amount):
                        st.rerun()
                    else:
                        st.error("Please enter a valid month and amount.")

    with col2:
        st.subheader("Add New Bill")
        search = st.text_input("Company search")
        suggestions = lookup_companies(search) if search else []
        picked = None
        if suggestions:
            picked = st.selectbox(
                "Suggestions",
                options=[None] + suggestions,
                format_func=lambda s: "Type a name manually" if s is None else f"{s['name']} ({s['domain']})"
            )

        with st.form("add_bill_form"):
            bill_name = st.text_input("Bill Name", value=picked["name"] if picked else search)
            bill_amount = st.number_input("Amount", min_value=0.0, value=100.0, step=10.0)
            due_date = st.date_input("Due Date", value=date.today())
            payment_method = st.selectbox("Paid From", [m.value for m in PaymentMethod])
            is_auto_pay = st.checkbox("AutoPay")
            is_recurring = st.checkbox("Recurring")
            frequency = st.selectbox("Frequency", [f.value for f in RecurrenceFrequency], index=2)

            if st.form_submit_button("Add Bill"):
                if bill_name:
                    planner.add_bill(Bill(
                        name=bill_name,
                        amount=bill_amount,
                        due_date=due_date,
                        payment_method=payment_method,
                        is_auto_pay=is_auto_pay,
                        is_recurring=is_recurring,
                        recurrence_frequency=frequency if is_recurring else None,
                        day_of_month=due_date.day if is_recurring else None,
                        company_domain=picked["domain"] if picked else None,
                        logo_url=picked.get("logo") if picked else None,
                    ))
                    st.success(f"Bill '{bill_name}' added successfully!")
                    st.rerun()
                else:
                    st.error("Please enter a bill name.")

        if bills:
            st.divider()
            st.subheader("Delete Bill")
            bill_to_delete = st.selectbox("Select bill to delete", options=bills, format_func=lambda b: b.name)
            if st.button("Delete Bill", type="secondary"):
                planner.delete_bill(bill_to_delete.id)
                st.rerun()


def show_debts_page(planner: BudgetPlanner):
    """Show credit cards, payments and payoff settings."""
    st.header("💳 Debts")
    state = planner.repos.debt_state.load()
    cards = state.credit_cards()

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("Credit Cards")
        if cards:
            df_cards = pd.DataFrame([{
                "Name": card.name,
                "Balance": card.current_balance,
                "Limit": card.credit_limit,
                "APR": f"{card.apr * 100:.2f}%",
                "Minimum": format_currency(card.minimum_payment),
                "Due Day": card.due_day,
                "Utilization": card.utilization,
            } for card in cards])
            st.dataframe(df_cards, use_container_width=True, hide_index=True)
            st.metric("Total Debt", format_currency(sum(card.current_balance for card in cards)))

            fig = px.bar(df_cards, x="Name", y="Utilization", title="Utilization (%)")
            st.plotly_chart(fig, use_container_width=True)

            st.subheader("Payments")
            card = st.selectbox("Card", options=cards, format_func=lambda c: c.name)
            for payment in card.payment_history:
                st.write(f"{payment.date:%Y-%m-%d}: {format_currency(payment.amount)}")
            with st.form("payment_form"):
                payment_text = st.text_input("Payment Amount", value=f"{card.minimum_payment:.2f}")
                if st.form_submit_button("Record Payment"):
                    if planner.add_payment(card.id, payment_text):
                        st.rerun()
                    else:
                        st.error("Payment not recorded. Check the amount.")
            if card.payment_history and st.button("Undo Last Payment"):
                planner.remove_last_payment(card.id)
                st.rerun()
            if st.button("Delete Card", type="secondary"):
                planner.delete_debt(card.id)
                st.rerun()
        else:
            st.info("No credit cards added yet.")

    with col2:
        st.subheader("Add Credit Card")
        with st.form("add_card_form"):
            name = st.text_input("Card Name")
            balance = st.number_input("Current Balance", min_value=0.0, value=0.0, step=100.0)
            credit_limit = st.number_input("Credit Limit", min_value=0.0, value=1000.0, step=100.0)
            apr = st.number_input("APR (%)", min_value=0.0, max_value=100.0, value=19.99, step=0.5) / 100
            minimum_payment = st.number_input("Minimum Payment", min_value=0.0, value=25.0, step=5.0)
            due_day = st.number_input("Due Day", min_value=1, max_value=31, value=15, step=1)

            if st.form_submit_button("Add Card"):
                if name:
                    planner.add_debt(CreditCard(
                        name=name,
                        total_amount=balance,
                        current_balance=balance,
                        interest_rate=apr,
                        apr=apr,
                        credit_limit=credit_limit,
                        minimum_payment=minimum_payment,
                        due_day=int(due_day),
                    ))
                    st.rerun()
                else:
                    st.error("Please enter a card name.")

        st.divider()
        st.subheader("Payoff Settings")
        with st.form("settings_form"):
            threshold = st.number_input(
                "Variable Threshold ($)", min_value=0.0,
                value=float(state.settings.variable_threshold), step=50.0
            )
            minimum_extra = st.number_input(
                "Minimum Extra Payment ($)", min_value=0.0,
                value=float(state.settings.minimum_extra_payment), step=10.0
            )
            aggressive = st.checkbox("Aggressive Payoff", value=state.settings.aggressive_payoff)
            if st.form_submit_button("Save Settings"):
                planner.update_settings({
                    "variable_threshold": threshold,
                    "minimum_extra_payment": minimum_extra,
                    "aggressive_payoff": aggressive,
                })
                st.success("Settings saved!")


def main():
    """Main application."""
    st.title("💰 Pay Period Planner")
    planner = st.session_state.planner

    with st.sidebar:
        st.title("Navigation")
        page = st.radio("Go to", ["Dashboard", "Bills", "Debts"])

    if page == "Dashboard":
        show_dashboard_page(planner)
    elif page == "Bills":
        show_bills_page(planner)
    elif page == "Debts":
        show_debts_page(planner)


# Run the app
if __name__ == "__main__":
    main()
