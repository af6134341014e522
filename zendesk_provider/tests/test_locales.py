from zendesk_provider.locales import LOCALE_IDS, LOCALE_TEXTS, locale_id, locale_text


def test_table_is_a_bijection() -> None:
    assert len(LOCALE_IDS) == len(LOCALE_TEXTS)


def test_lookups() -> None:
    assert locale_id("en-US") == 1
    assert locale_text(1) == "en-US"
    assert locale_id("de") == 8
    assert locale_text(1365) == "fr-fr"


def test_unknown_values() -> None:
    assert locale_id("xx-unknown") is None
    assert locale_text(-1) is None
