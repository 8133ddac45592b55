import json

from bibbox_core import translations
from bibbox_core.config import resource_path


def test_supported_codes_are_kept():
    assert translations.select_language("da") == "da"
    assert translations.select_language(" DA ") == "da"


def test_unsupported_codes_fall_back_to_baseline():
    assert translations.select_language("fr") == "en"
    assert translations.select_language(None) == "en"


def test_load_catalog_falls_back_for_unsupported_code():
    code, messages = translations.load_catalog("fr")
    assert code == "en"
    assert messages["loading"] == "Loading..."


def test_catalogs_share_the_same_message_ids():
    with open(resource_path("lang/en.json"), encoding="utf-8") as f:
        en = json.load(f)
    with open(resource_path("lang/da.json"), encoding="utf-8") as f:
        da = json.load(f)
    assert set(en) == set(da)


def test_message_lookup_falls_back():
    messages = {"a": "A"}
    assert translations.message(messages, "a") == "A"
    assert translations.message(messages, "b", "default") == "default"
    assert translations.message(messages, "b") == "b"
