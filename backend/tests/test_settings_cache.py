# tests/test_settings_cache.py

"""Tests for SettingsCache merging and the settings channel."""

import unittest
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from models.settings import SettingsDocument
from schemas.settings import StoreSettingsUpdate
from utils.errors import PermissionDeniedError, ServiceUnavailableError
from utils.settings_cache import SettingsCache, SettingsChannel, connect, publish_stored_settings


class TestDefaults(unittest.TestCase):

    def test_defaults_render_before_any_update(self) -> None:
        settings = SettingsCache().get()
        self.assertEqual(settings.store_name, "akWholesale")
        self.assertEqual(settings.currency_symbol, "₹")
        self.assertEqual(settings.whatsapp_number, "917505067414")
        self.assertIn("Market Yard", settings.address)
        self.assertEqual(len(settings.footer.quick_links), 5)
        self.assertIn(str(datetime.now().year), settings.footer.copyright_text)


class TestApplyPartial(unittest.TestCase):

    def setUp(self) -> None:
        self.cache = SettingsCache()

    def test_merges_only_given_fields(self) -> None:
        self.cache.apply_partial({"storeName": "Green Mandi"})
        settings = self.cache.get()
        self.assertEqual(settings.store_name, "Green Mandi")
        self.assertEqual(settings.currency_symbol, "₹")

    def test_snake_case_keys_accepted(self) -> None:
        self.cache.apply_partial({"whatsapp_number": "15550001111"})
        self.assertEqual(self.cache.get().whatsapp_number, "15550001111")

    def test_empty_currency_symbol_kept(self) -> None:
        self.cache.apply_partial({"currencySymbol": ""})
        self.assertEqual(self.cache.get().currency_symbol, "")

    def test_footer_replaced_shallowly(self) -> None:
        self.cache.apply_partial({"footer": {"aboutText": "Hi", "quickLinks": []}})
        footer = self.cache.get().footer
        self.assertEqual(footer.about_text, "Hi")
        self.assertEqual(footer.quick_links, [])
        self.assertEqual(footer.bg_color, "#111827")

    def test_unknown_and_null_keys_ignored(self) -> None:
        before = self.cache.get()
        self.cache.apply_partial({"colour": "red", "storeName": None})
        self.assertEqual(self.cache.get(), before)

    def test_uncoercible_update_keeps_previous(self) -> None:
        self.cache.apply_partial({"storeName": "Kept"})
        with self.assertLogs("utils.settings_cache", level="WARNING"):
            self.cache.apply_partial({"taxRate": "not-a-number", "storeName": "Dropped"})
        self.assertEqual(self.cache.get().store_name, "Kept")

    def test_accepts_update_model(self) -> None:
        self.cache.apply_partial(StoreSettingsUpdate(currency_symbol="$"))
        self.assertEqual(self.cache.get().currency_symbol, "$")
        self.assertEqual(self.cache.get().store_name, "akWholesale")


class TestSettingsChannel(unittest.TestCase):

    def setUp(self) -> None:
        self.cache = SettingsCache()
        self.channel = SettingsChannel()
        self.disconnect = connect(self.cache, self.channel)

    def test_published_update_reaches_cache(self) -> None:
        self.channel.publish({"storeName": "Pushed"})
        self.assertEqual(self.cache.get().store_name, "Pushed")

    def test_permission_denied_only_warns(self) -> None:
        with self.assertLogs("utils.settings_cache", level="WARNING") as logs:
            self.channel.publish_error(PermissionDeniedError("rules"))
        self.assertEqual(logs.records[0].levelname, "WARNING")
        self.assertEqual(self.cache.get().store_name, "akWholesale")

    def test_other_errors_logged_as_errors(self) -> None:
        with self.assertLogs("utils.settings_cache", level="WARNING") as logs:
            self.channel.publish_error(ServiceUnavailableError("offline"))
        self.assertEqual(logs.records[0].levelname, "ERROR")
        self.assertEqual(self.cache.get().store_name, "akWholesale")

    def test_unsubscribe_stops_updates(self) -> None:
        self.disconnect()
        self.channel.publish({"storeName": "Ignored"})
        self.assertEqual(self.cache.get().store_name, "akWholesale")


def test_stored_document_replayed_into_cache(db_session):
    db_session.add(SettingsDocument(id="general", data={"storeName": "Stored Mandi", "currencySymbol": "Rs "}))
    db_session.commit()
    cache, channel = SettingsCache(), SettingsChannel()
    connect(cache, channel)

    publish_stored_settings(db_session, channel)

    assert cache.get().store_name == "Stored Mandi"
    assert cache.get().currency_symbol == "Rs "
    assert cache.get().whatsapp_number == "917505067414"


def test_no_stored_document_keeps_defaults(db_session):
    cache, channel = SettingsCache(), SettingsChannel()
    connect(cache, channel)
    publish_stored_settings(db_session, channel)
    assert cache.get() == SettingsCache().get()


@pytest.mark.parametrize(
    "message, level",
    [
        ("attempt to write a readonly database", "WARNING"),
        ("unable to open database file", "ERROR"),
    ],
)
def test_settings_read_failure_logged_by_kind(db_session, monkeypatch, caplog, message, level):
    def fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception(message))

    monkeypatch.setattr(db_session, "query", fail)
    cache, channel = SettingsCache(), SettingsChannel()
    connect(cache, channel)

    with caplog.at_level("WARNING", logger="utils.settings_cache"):
        publish_stored_settings(db_session, channel)

    assert [r.levelname for r in caplog.records if r.name == "utils.settings_cache"] == [level]
    assert cache.get().store_name == "akWholesale"


def test_startup_loads_stored_settings(app, session_factory, monkeypatch):
    import main

    db = session_factory()
    db.add(SettingsDocument(id="general", data={"storeName": "Startup Mandi"}))
    db.commit()
    db.close()

    monkeypatch.setattr(main, "SessionLocal", session_factory)
    main.load_stored_settings(app)

    assert app.state.settings_cache.get().store_name == "Startup Mandi"
