from phrasemeter.normalizer import (
    STOP_WORDS,
    count_words,
    normalize_text,
    similarity_tokens,
    word_segments,
)

def test_normalize_quotes_whitespace_and_ascii():
    raw = "  “Hello”\t\n  Wörld’s  "
    assert normalize_text(raw) == "\"hello\" wrld's"

def test_similarity_tokens_drop_stop_words_and_punctuation():
    tokens = similarity_tokens("The only thing we have to fear is fear itself.")
    assert tokens == ["only", "thing", "we", "have", "fear", "fear", "itself"]
    assert not STOP_WORDS.intersection(tokens)

def test_word_count_keeps_stop_words():
    phrase = "The Right to Bear Burritos Shall Not Be Infringed"
    assert count_words(phrase) == 9
    tokens = similarity_tokens(phrase)
    assert tokens == ["right", "bear", "burritos", "shall", "infringed"]
    assert len(tokens) < count_words(phrase)

def test_word_segments_split_on_non_alphanumerics():
    assert word_segments("solar-powered bicycles!") == ["solar", "powered", "bicycles"]
    assert word_segments("correct_horse.battery99") == ["correct", "horse", "battery99"]
    assert count_words("!!! ... ---") == 0

def test_hyphenated_word_is_one_similarity_token():
    # similarity tokenization removes the hyphen instead of splitting on it
    assert similarity_tokens("solar-powered") == ["solarpowered"]

def test_word_count_keeps_accented_words_whole():
    assert word_segments("naïve café résumé") == ["naïve", "café", "résumé"]
    assert count_words("naïve café résumé") == 3
    assert count_words("snake_case words") == 3
