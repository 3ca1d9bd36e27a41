from interview_api.core.prompt import get_interviewer_prompt, get_report_request_prompt


def test_prompt_embeds_interview_details():
    prompt = get_interviewer_prompt("Backend Engineer", "hard", "databases", 7)

    assert "- Role: Backend Engineer" in prompt
    assert "- Topic/Technology: databases" in prompt
    assert "- Difficulty: hard" in prompt
    assert "- Total Questions: 7" in prompt
    assert "After all 7 questions are answered" in prompt


def test_prompt_mandates_json_report_schema():
    prompt = get_interviewer_prompt("Data Scientist", "easy", "statistics", 3)

    assert "```json" in prompt
    for key in ("overallScore", "grade", "summary", "strengths", "improvements", "recommendation", "breakdown"):
        assert f'"{key}"' in prompt
    assert "Hire | Consider | Reject" in prompt
    assert "Ask one question at a time" in prompt


def test_prompt_is_deterministic():
    first = get_interviewer_prompt("SRE", "medium", "kubernetes", 5)
    second = get_interviewer_prompt("SRE", "medium", "kubernetes", 5)
    assert first == second
    assert first == first.strip()


def test_report_request_mentions_json_format():
    text = get_report_request_prompt()
    assert "final interview report" in text
    assert "JSON" in text
