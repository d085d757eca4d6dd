"""Read views over a session's messages. Views work on copies only."""

from collections.abc import Iterable

from cotflow.domain.messages import Message, MessageRole


def final_answer_view(messages: Iterable[Message]) -> list[Message]:
    """Keep each final answer together with the question that triggered it."""
    view: list[Message] = []
    question: Message | None = None
    for message in messages:
        if message.role == MessageRole.HUMAN:
            question = message
        if message.is_final_answer:
            if question is not None:
                view.append(question)
            view.append(message)
            question = None
    return view


def tool_observation_view(messages: Iterable[Message]) -> list[Message]:
    return [message for message in messages if message.role == MessageRole.TOOL]
