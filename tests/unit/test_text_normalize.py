from apps.worker.lib.text_normalize import TextNormalizer, clean_text, normalize_text, remove_boilerplate


def test_normalize_lowercases_and_strips_punctuation() -> None:
    assert normalize_text("  Pt underwent   CRANIOTOMY, POD#1!!  ") == "pt underwent craniotomy pod1"


def test_normalize_is_idempotent() -> None:
    norm = TextNormalizer()
    samples = [
        "Pt underwent craniotomy POD1. Doing well.",
        "PROGRESS NOTE\nMRN: 12345\nPatient stable.",
        "progress progress note note follow-up in 2 weeks",
        "",
        "   ",
    ]
    for s in samples:
        once = norm.normalize(s)
        assert norm.normalize(once) == once


def test_normalize_handles_none_and_empty() -> None:
    assert TextNormalizer().normalize("") == ""
    assert normalize_text(None) == ""


def test_remove_boilerplate_strips_headers_and_signatures() -> None:
    raw = "PROGRESS NOTE\nMRN: 12345\nPatient stable.\nElectronically signed by Dr. Smith"
    assert remove_boilerplate(raw) == "Patient stable."


def test_date_header_survives_boilerplate_removal() -> None:
    raw = "Date: 03/14/2024\nAttending: Jones\nPatient stable."
    cleaned = clean_text(raw, strip_boilerplate=True)
    assert "03/14/2024" in cleaned
    assert "Jones" not in cleaned


def test_boilerplate_flag_changes_equality_key() -> None:
    a = "Patient stable overnight.\nElectronically signed by Dr. Smith"
    b = "Patient stable overnight.\nElectronically signed by Dr. Lee"
    assert TextNormalizer(remove_boilerplate=True).normalize(a) == TextNormalizer(remove_boilerplate=True).normalize(b)
    assert TextNormalizer(remove_boilerplate=False).normalize(a) != TextNormalizer(remove_boilerplate=False).normalize(b)


def test_clean_text_keeps_case_and_punctuation() -> None:
    assert clean_text("Pt  stable.\r\n\tPlan:  continue  ") == "Pt stable.\nPlan: continue"
