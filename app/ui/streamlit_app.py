from __future__ import annotations

import streamlit as st

from app.assistant.schema import ConversationThread
from app.ui.socket_client import socket_status, stream_answer


def _threads() -> list[ConversationThread]:
    if "threads" not in st.session_state:
        st.session_state.threads = [ConversationThread()]
        st.session_state.active = 0
    return st.session_state.threads


st.set_page_config(page_title="HR Assistant", layout="wide")
st.title("HR Assistant")
st.caption("Ask questions about HR policies; answers are grounded in the HR documentation")

threads = _threads()

with st.sidebar:
    st.subheader("Conversations")
    st.caption(f"Socket: {socket_status()}")
    if st.button("New conversation"):
        threads.append(ConversationThread())
        st.session_state.active = len(threads) - 1
    if st.button("Clear conversations"):
        st.session_state.threads = threads = [ConversationThread()]
        st.session_state.active = 0
    for idx, item in enumerate(threads):
        label = f"{item.title} ({len(item.messages)})"
        if st.button(label, key=f"thread-{item.id}", disabled=idx == st.session_state.active):
            st.session_state.active = idx

thread = threads[st.session_state.active]

for message in thread.messages:
    with st.chat_message("user" if message.is_user else "assistant"):
        st.write(message.text)

question = st.chat_input("Your HR question...")
if question:
    if not question.strip():
        st.warning("Please enter a question.")
    else:
        with st.chat_message("user"):
            st.write(question)
        history_thread = thread.model_copy(deep=True)
        thread.add(question, is_user=True)
        with st.chat_message("assistant"):
            try:
                answer = st.write_stream(stream_answer(question, history_thread))
                thread.add(answer if isinstance(answer, str) else "".join(answer), is_user=False)
            except Exception as exc:
                st.error(f"Ask failed: {exc}")
