import datetime as dt
import os
import unittest
from unittest import mock

from xoso.config import SourceSettings, load_from_environment
from xoso.datasource import DEFAULT_RELAYS
from xoso.types import Region


class ConfigTests(unittest.TestCase):
    @mock.patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        settings = load_from_environment()

        self.assertEqual(settings.direct_timeout_seconds, 5)
        self.assertEqual(settings.min_body_bytes, 200)
        self.assertEqual(settings.relays, DEFAULT_RELAYS)
        self.assertEqual([r.name for r in settings.relays], ["allorigins", "corsproxy", "codetabs"])

    @mock.patch.dict(
        os.environ,
        {
            "XOSO__RELAYS": "corsproxy, allorigins",
            "XOSO__DIRECT_TIMEOUT_SECONDS": "2.5",
            "XOSO__SOURCE_HOST": "mirror.example",
        },
        clear=True,
    )
    def test_relay_order_comes_from_environment(self) -> None:
        settings = load_from_environment()

        self.assertEqual([r.name for r in settings.relays], ["corsproxy", "allorigins"])
        self.assertEqual(settings.direct_timeout_seconds, 2.5)
        self.assertEqual(
            settings.source.url_for(Region.NORTH, dt.date(2024, 1, 5)),
            "https://mirror.example/xsmb-05-01-2024.html",
        )

    @mock.patch.dict(os.environ, {"XOSO__RELAYS": "nope"}, clear=True)
    def test_unknown_relay_is_rejected(self) -> None:
        with self.assertRaises(RuntimeError):
            load_from_environment()

    def test_only_north_has_a_live_source(self) -> None:
        source = SourceSettings()

        self.assertTrue(source.supports(Region.NORTH))
        self.assertFalse(source.supports(Region.CENTRAL))
        self.assertFalse(source.supports(Region.SOUTH))


if __name__ == "__main__":
    unittest.main()
