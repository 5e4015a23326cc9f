import pytest

from nyayasetu.services.chat_service import MAX_HISTORY_LIMIT, ChatService
from nyayasetu.services.legal_chatbot import LegalChatbot
from nyayasetu.storage import MemoryStorage


@pytest.fixture
def bot() -> LegalChatbot:
    return LegalChatbot()


def test_known_section_with_code(bot: LegalChatbot) -> None:
    reply = bot.reply("What does Section 420 of IPC deal with?")
    assert reply.topic == "section"
    assert "cheating" in reply.text


def test_section_letter_suffix(bot: LegalChatbot) -> None:
    assert "cruelty" in bot.reply("explain section 498A ipc").text
    assert "res judicata" in bot.reply("Section 11 CPC").text


def test_unknown_section(bot: LegalChatbot) -> None:
    assert "Section 999 of IPC" in bot.reply("section 999 of ipc").text
    assert "Section 66 of IT ACT" in bot.reply("section 66 of the IT Act").text
    assert "about Section 5." in bot.reply("what is section 5?").text


def test_faq_phrase(bot: LegalChatbot) -> None:
    reply = bot.reply("What are my rights when arrested by police?")
    assert reply.topic == "faq"
    assert "magistrate within 24 hours" in reply.text


def test_topic_keywords(bot: LegalChatbot) -> None:
    assert bot.reply("How do I get bail?").topic == "bail"
    assert bot.reply("how to lodge an FIR").topic == "fir"
    assert bot.reply("My landlord kept the deposit").topic == "tenancy"
    # word boundaries
    assert bot.reply("is the parent liable").topic == "general"


def test_default_and_encrypted(bot: LegalChatbot) -> None:
    assert bot.reply("hello").text == LegalChatbot.DEFAULT_REPLY
    assert bot.reply("").topic == "general"
    reply = bot.reply("section 420 of ipc", encrypted=True)
    assert reply.text == LegalChatbot.DEFAULT_REPLY


def test_suggested_questions_are_copies(bot: LegalChatbot) -> None:
    questions = bot.suggested_questions()
    questions.clear()
    assert len(bot.suggested_questions()) == 5


@pytest.mark.asyncio
async def test_chat_service_stores_both_sides() -> None:
    storage = MemoryStorage()
    service = ChatService()

    answer = await service.exchange(storage, "guest", "How do I get bail?")

    assert answer.is_user_message is False
    assert "Bail" in answer.content
    history = await service.history(storage, "guest")
    assert [(m.is_user_message, m.content) for m in history] == [
        (True, "How do I get bail?"),
        (False, answer.content),
    ]


@pytest.mark.asyncio
async def test_chat_service_clamps_history_limit() -> None:
    storage = MemoryStorage()
    service = ChatService()
    for i in range(3):
        await storage.create_chat_message(user_id="7", is_user_message=True, content=str(i))

    assert [m.content for m in await service.history(storage, "7", limit=0)] == ["2"]
    assert len(await service.history(storage, "7", limit=MAX_HISTORY_LIMIT * 10)) == 3
