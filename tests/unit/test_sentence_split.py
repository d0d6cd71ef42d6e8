from apps.worker.lib.sentence_split import SentenceSplitter, join_sentences, split_sentences


def test_split_keeps_casing_and_terminators() -> None:
    assert split_sentences("Pt underwent craniotomy POD1. Doing well.") == [
        "Pt underwent craniotomy POD1.",
        "Doing well.",
    ]


def test_split_protects_abbreviations() -> None:
    text = "Seen by Dr. Smith today. CT. head negative! Plan: continue q1h neuro checks?"
    assert SentenceSplitter().split(text) == [
        "Seen by Dr. Smith today.",
        "CT. head negative!",
        "Plan: continue q1h neuro checks?",
    ]


def test_split_empty() -> None:
    assert split_sentences("") == []
    assert split_sentences("   \n ") == []


def test_split_ignores_decimals() -> None:
    assert split_sentences("Dexamethasone 1.5 mg given. Stable.") == ["Dexamethasone 1.5 mg given.", "Stable."]


def test_join_adds_missing_periods() -> None:
    assert join_sentences(["Doing well", "Pupils reactive"]) == "Doing well. Pupils reactive."
    assert join_sentences(["Any pain?", "None."]) == "Any pain? None."
    assert join_sentences([]) == ""


def test_split_join_round_trip_is_stable() -> None:
    text = "Evening rounds POD2: craniotomy patient with pupils equal and reactive. Family updated at bedside."
    assert join_sentences(split_sentences(text)) == text
