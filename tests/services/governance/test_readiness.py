from govbot.backend.models import ChatRole, Message
from govbot.services.governance.readiness import check_vote_readiness


def user(content):
    return Message(role=ChatRole.USER, content=content)


def assistant(content):
    return Message(role=ChatRole.ASSISTANT, content=content)


def test_short_discussion_is_not_ready():
    readiness = check_vote_readiness([user("hi"), assistant("hello")])
    assert readiness.can_vote is False
    assert "More discussion is needed" in readiness.reason


def test_missing_purpose_is_requested_first():
    messages = [
        user("It will have a big impact"),
        assistant("What about risks?"),
        user("The main risk is low"),
        assistant("Thanks"),
    ]
    readiness = check_vote_readiness(messages)
    assert readiness.can_vote is False
    assert readiness.reason == "Please explain the purpose or goal of your proposal."


def test_assistant_messages_do_not_count():
    messages = [
        assistant("What is the purpose, impact and risk?"),
        user("ok"),
        assistant("Please explain the goal and effect"),
        user("sure"),
    ]
    readiness = check_vote_readiness(messages)
    assert readiness.can_vote is False
    assert "purpose or goal" in readiness.reason


def test_missing_risks():
    messages = [
        user("Our goal is better tooling"),
        assistant("And the effect?"),
        user("The result is faster releases"),
        assistant("Thanks"),
    ]
    readiness = check_vote_readiness(messages)
    assert readiness.can_vote is False
    assert "concerns or risks" in readiness.reason


def test_covered_discussion_is_ready():
    messages = [
        user("The objective is to fund audits"),
        assistant("What impact do you expect?"),
        user("The effect is fewer incidents. One challenge is auditor availability"),
        assistant("Thanks"),
    ]
    readiness = check_vote_readiness(messages)
    assert readiness.can_vote is True
    assert readiness.reason is None
