from app.assistant.schema import ConversationThread


def test_thread_tracks_messages_and_history() -> None:
    thread = ConversationThread()

    thread.add("What is the notice period?", is_user=True)
    thread.add("Two months.", is_user=False)

    assert thread.title == "What is the notice period?"
    assert thread.updated_at == thread.messages[-1].timestamp
    assert [(m.role, m.content) for m in thread.history()] == [
        ("user", "What is the notice period?"),
        ("assistant", "Two months."),
    ]
