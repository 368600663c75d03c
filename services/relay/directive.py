# services/relay/directive.py
"""
System directive normalisation.

The first message of every conversation must be the currently configured
system prompt. It is re-applied on every turn so a changed SYSTEM_PROMPT
takes effect on the next message without dropping earlier turns.
"""

from .models import Message, Role


def inject_directive(messages: list[Message], directive: str) -> list[Message]:
    """
    Return a copy of `messages` whose first element is {system, directive}.

    - empty history, or first message not a system message -> insert at 0
    - first message is a system message -> replace its content

    Every other message is kept as-is and in order. The input is not mutated.
    """
    system_message = Message.system(directive)

    if not messages or messages[0].role != Role.SYSTEM:
        return [system_message, *messages]

    return [system_message, *messages[1:]]
