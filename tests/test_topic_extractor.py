import pytest

from app.core.exceptions import ParseError, UpstreamError
from app.services.gemini import GeminiService
from app.services.topic_extractor import TopicExtractor, parse_topic_response
from conftest import FakeGeminiClient


def test_parse_tolerates_surrounding_commentary():
    topic = parse_topic_response('foo {"searchTerm":"grief"} bar')
    assert topic.search_term == "grief"


def test_parse_handles_code_fences():
    text = '```json\n{"searchTerm": "Toxic Relationship"}\n```'
    assert parse_topic_response(text).search_term == "Toxic Relationship"


@pytest.mark.parametrize(
    "text",
    [
        "relaxation",
        "",
        "} before {",
        '{"searchTerm": "grief"',
        "{searchTerm: grief}",
        '{"topic": "grief"}',
        '{"searchTerm": "   "}',
        '{"searchTerm": 42}',
    ],
)
def test_parse_fails_closed(text):
    with pytest.raises(ParseError):
        parse_topic_response(text)


async def test_extract_topic_sends_utterance_with_fixed_instruction(gemini, fake_gemini_client):
    fake_gemini_client.completions = ['Sure! {"searchTerm": "relaxation"}']
    extractor = TopicExtractor(gemini)

    topic = await extractor.extract_topic("I am stressed out, suggest a podcast to relax")

    assert topic.search_term == "relaxation"
    call = fake_gemini_client.completion_calls[0]
    assert call["model"] == "gemini-test"
    assert call["contents"] == "I am stressed out, suggest a podcast to relax"
    assert '{"searchTerm"' in call["config"].system_instruction


async def test_extract_topic_is_stateless(gemini, fake_gemini_client):
    fake_gemini_client.completions = ['{"searchTerm": "a"}', '{"searchTerm": "b"}']
    extractor = TopicExtractor(gemini)

    await extractor.extract_topic("first")
    await extractor.extract_topic("second")

    assert [c["contents"] for c in fake_gemini_client.completion_calls] == ["first", "second"]


async def test_extract_topic_propagates_parse_error(gemini, fake_gemini_client):
    fake_gemini_client.completions = ["I could not decide"]
    with pytest.raises(ParseError):
        await TopicExtractor(gemini).extract_topic("hmm")


async def test_extract_topic_wraps_gemini_failure(gemini, fake_gemini_client):
    fake_gemini_client.completions = [RuntimeError("quota exceeded")]
    with pytest.raises(UpstreamError):
        await TopicExtractor(gemini).extract_topic("hmm")


async def test_extract_topic_times_out():
    client = FakeGeminiClient(completions=['{"searchTerm": "late"}'], delay=0.5)
    gemini = GeminiService(client=client, timeout=0.01)
    with pytest.raises(UpstreamError, match="timed out"):
        await TopicExtractor(gemini).extract_topic("hurry")


async def test_missing_client_is_upstream_error():
    gemini = GeminiService(api_key=None)
    with pytest.raises(UpstreamError):
        await TopicExtractor(gemini).extract_topic("anything")
