from core.sentences import extract_relevant_sentences, split_sentences


def test_split_on_lines_then_sentence_ends():
    text = "First one. Second one!\nThird? Fourth"
    assert split_sentences(text) == ["First one.", "Second one!", "Third?", "Fourth"]


def test_split_keeps_dotted_names_together():
    assert split_sentences("Built with Node.js and ASP.NET daily.") == ["Built with Node.js and ASP.NET daily."]


def test_without_query_tokens_returns_lead_sentences():
    text = "One. Two. Three. Four."
    assert extract_relevant_sentences(text, [], max_sentences=2) == ["One.", "Two."]


def test_relevant_sentence_ranks_first_and_ties_keep_order():
    text = "I like cats. Python is great for data pipelines. Go is fast."
    picked = extract_relevant_sentences(text, ["python", "data"], max_sentences=2)
    assert picked == ["Python is great for data pipelines.", "I like cats."]


def test_sentences_without_content_are_dropped():
    assert extract_relevant_sentences("It is what it is. Python rocks.", ["python"]) == ["Python rocks."]
