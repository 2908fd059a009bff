"""Streamlit render server for the Marketing Coach Agent.

This does not replace FastAPI; it renders the three-screen flow (mode picker,
business form, chat) and talks to the backend `/api/agent` route.

Run with: streamlit run coach_ui/app.py
"""

import streamlit as st

from coach.config import Settings
from coach.models import BusinessContext
from coach.prompts import MODE_CARDS, mode_card
from coach_ui.client import MediatorClient
from coach_ui.components import verbatim_markdown
from coach_ui.controller import BusinessContextError, ConversationController, Stage

settings = Settings.from_env()
BACKEND_URL = settings.backend_url

st.set_page_config(page_title="Marketing Coach Agent", page_icon="✨", layout="centered")

if "controller" not in st.session_state:
    st.session_state.controller = ConversationController(MediatorClient(BACKEND_URL))
controller: ConversationController = st.session_state.controller


def render_mode_picker():
    st.title("✨ Marketing Coach Agent")
    st.write("Your AI-powered marketing strategy assistant")
    for col, card in zip(st.columns(len(MODE_CARDS)), MODE_CARDS):
        with col:
            st.subheader(card.title)
            st.caption(card.description)
            if st.button("Start", key=f"mode-{card.mode.value}"):
                controller.select_mode(card.mode)
                st.rerun()

    st.divider()
    st.subheader("How It Works")
    st.markdown(
        "1. Choose your marketing objective from the options above\n"
        "2. Share information about your business and target audience\n"
        "3. Engage in a conversation with your AI marketing coach\n"
        "4. Get actionable strategies, insights, and detailed plans"
    )


def render_header():
    left, right = st.columns([4, 1])
    left.header(f"💡 {mode_card(controller.mode).title}")
    if right.button("Change Mode"):
        controller.reset()
        st.rerun()


def render_business_form():
    st.subheader("Tell me about your business")
    with st.form("business-info"):
        industry = st.text_input(
            "Industry", placeholder="e.g., Health & Fitness, SaaS, E-commerce"
        )
        audience = st.text_input(
            "Target Audience",
            placeholder="e.g., Small business owners, Busy professionals",
        )
        product = st.text_input(
            "Product/Service",
            placeholder="e.g., Online coaching program, Project management software",
        )
        submitted = st.form_submit_button("Start Coaching Session")
    if submitted:
        try:
            controller.submit_business_context(
                BusinessContext(
                    industry=industry, target_audience=audience, product=product
                )
            )
        except BusinessContextError as e:
            st.warning(str(e))
        else:
            st.rerun()


def render_chat():
    for m in controller.transcript:
        st.chat_message(m.role).markdown(verbatim_markdown(m.content))

    prompt = st.chat_input(
        "Share your thoughts or ask a question...", disabled=controller.pending
    )
    if prompt and prompt.strip():
        st.chat_message("user").markdown(verbatim_markdown(prompt))
        with st.spinner("Thinking..."):
            reply = controller.send_message(prompt)
        if reply is not None:
            st.chat_message("assistant").markdown(verbatim_markdown(reply.content))


if controller.stage is Stage.IDLE:
    render_mode_picker()
else:
    render_header()
    if controller.stage is Stage.COLLECTING_CONTEXT:
        render_business_form()
    else:
        render_chat()

with st.sidebar:
    st.header("Diagnostics")
    st.write("Backend:", BACKEND_URL)
    client = controller.client
    if st.button("Health check"):
        try:
            st.success(client.health())
        except Exception as e:
            st.error(str(e))
    if st.button("Provider status"):
        try:
            st.info(client.provider_status())
        except Exception as e:
            st.error(str(e))
