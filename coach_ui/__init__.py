"""coach_ui: browser-side conversation flow for the Marketing Coach Agent.

The controller holds one coaching session in memory; the Streamlit app
renders it and talks to the FastAPI backend through the mediator client.
"""

__all__ = [
    "client",
    "components",
    "controller",
]
