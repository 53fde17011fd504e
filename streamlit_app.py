from __future__ import annotations

import json

import requests
import streamlit as st


st.set_page_config(page_title="GlobalTree Study Abroad Assistant", page_icon="🎓", layout="centered")


def _call_api(method: str, path: str, payload: dict | None = None, params: dict | None = None) -> tuple[int, dict]:
    base_url = st.session_state.get("api_base_url", "http://localhost:8000")
    url = base_url.rstrip("/") + path
    response = requests.request(method, url, json=payload, params=params, timeout=60)
    data = {}
    try:
        data = response.json()
    except json.JSONDecodeError:
        pass
    return response.status_code, data


def _chat_interface() -> None:
    st.header("Ask about studying abroad")

    if "messages" not in st.session_state:
        st.session_state["messages"] = []

    for entry in st.session_state["messages"]:
        with st.chat_message(entry["role"]):
            st.markdown(entry["content"])

    user_prompt = st.chat_input("Universities, scholarships, visas, or book a consultation")
    if not user_prompt:
        return

    st.session_state["messages"].append({"role": "user", "content": user_prompt})
    with st.chat_message("user"):
        st.markdown(user_prompt)

    payload = {"messages": st.session_state["messages"]}
    if st.session_state.get("session_id"):
        payload["sessionId"] = st.session_state["session_id"]

    status, data = _call_api("POST", "/api/chat", payload)
    message = data.get("message") or {}
    assistant_reply = message.get("content") or f"Request failed with status {status}. Response: {data}"
    if data.get("sessionId"):
        st.session_state["session_id"] = data["sessionId"]

    meta = data.get("meta") or {}
    st.session_state["lead_suggested"] = bool(meta.get("leadSuggested"))

    st.session_state["messages"].append({"role": "assistant", "content": assistant_reply})
    with st.chat_message("assistant"):
        st.markdown(assistant_reply)
        intent = (meta.get("intent") or {}).get("intent")
        if intent:
            st.caption(f"intent: {intent}")


def _handoff_form() -> None:
    if not st.session_state.get("lead_suggested") or not st.session_state.get("session_id"):
        return
    st.subheader("Talk to a counselor")
    with st.form("handoff"):
        name = st.text_input("Full name")
        email = st.text_input("Email")
        phone = st.text_input("Phone")
        note = st.text_area("Anything we should know?", height=80)
        submitted = st.form_submit_button("Request callback")

    if not submitted:
        return
    status, data = _call_api(
        "POST",
        "/api/handoff",
        payload={
            "sessionId": st.session_state["session_id"],
            "name": name,
            "email": email,
            "phone": phone,
            "note": note or None,
        },
    )
    if status != 200:
        st.error(f"Handoff failed ({status}): {data.get('error', 'no details')}")
        return
    st.success(data.get("message", "Handoff requested."))
    st.session_state["lead_suggested"] = False


def _sidebar_controls() -> None:
    st.sidebar.title("Session")
    st.session_state["api_base_url"] = st.sidebar.text_input(
        "API base URL",
        st.session_state.get("api_base_url", "http://localhost:8000"),
    )
    session_id = st.session_state.get("session_id")
    st.sidebar.caption(f"Session: {session_id or 'not started'}")

    if session_id and st.sidebar.button("Show stored conversation"):
        status, data = _call_api("GET", "/api/conversations", params={"sessionId": session_id})
        if status == 200:
            st.sidebar.json(data.get("entries", []))
        else:
            st.sidebar.error(f"Could not load conversation ({status})")

    if st.sidebar.button("Reset conversation"):
        st.session_state["messages"] = []
        st.session_state["session_id"] = None
        st.session_state["lead_suggested"] = False
        st.rerun()


def main() -> None:
    _sidebar_controls()
    _chat_interface()
    _handoff_form()


if __name__ == "__main__":
    main()
