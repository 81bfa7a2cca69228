from __future__ import annotations

import json
import sys
import tempfile
import unittest
import urllib.error
from pathlib import Path
from unittest import mock

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from ptable_svg.data import loader as loader_module
from ptable_svg.data.loader import DataLoader, get_loader, validate_config, validate_elements
from ptable_svg.errors import FormatError, ResourceError, ValidationError


def _element(number: int, symbol: str, period: int, group: int, category: str, **extra) -> dict:
    record = {
        "number": number,
        "symbol": symbol,
        "name": f"Element {symbol}",
        "period": period,
        "group": group,
        "category": category,
    }
    record.update(extra)
    return record


def _config() -> dict:
    return {
        "layouts": {"normal": {"boxWidth": 60, "boxHeight": 60, "gap": 2, "padding": 10}},
        "themes": {"light": {"background": "#fff", "text": "#000", "stroke": "#333", "categories": {}}},
        "typography": {"normal": {"symbolSize": 20, "numberSize": 10, "nameSize": 8}},
        "svg": {},
    }


class LoaderTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write_json(self, name: str, payload) -> Path:
        path = self.root / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path


class LoadElementsTests(LoaderTestCase):
    def test_loads_and_caches_dataset(self) -> None:
        path = self.write_json("elements.json", {"elements": [_element(1, "H", 1, 1, "nonmetal")]})
        loader = DataLoader(path)
        with mock.patch.object(loader_module, "read_text", wraps=loader_module.read_text) as reader:
            first = loader.load_elements()
            second = loader.load_elements()
        self.assertIs(first, second)
        self.assertEqual(reader.call_count, 1)
        self.assertEqual(first[0].symbol, "H")

    def test_atomic_mass_is_passed_through(self) -> None:
        path = self.write_json(
            "elements.json",
            {
                "elements": [
                    _element(1, "H", 1, 1, "nonmetal", atomic_mass=1.008),
                    _element(43, "Tc", 5, 7, "transition metal", atomic_mass="[98]"),
                    _element(2, "He", 1, 18, "noble gas"),
                ]
            },
        )
        elements = DataLoader(path).load_elements()
        self.assertEqual([e.atomic_mass for e in elements], [1.008, "[98]", None])

    def test_missing_symbol_names_index_and_field(self) -> None:
        broken = _element(2, "He", 1, 18, "noble gas")
        del broken["symbol"]
        path = self.write_json("elements.json", {"elements": [_element(1, "H", 1, 1, "nonmetal"), broken]})
        loader = DataLoader(path)
        with self.assertRaises(ValidationError) as ctx:
            loader.load_elements()
        self.assertEqual(ctx.exception.index, 1)
        self.assertEqual(ctx.exception.field, "symbol")
        self.assertIn("index 1", str(ctx.exception))
        self.assertIn("symbol", str(ctx.exception))
        self.assertIsNone(loader.elements)

        self.write_json(
            "elements.json",
            {"elements": [_element(1, "H", 1, 1, "nonmetal"), _element(2, "He", 1, 18, "noble gas")]},
        )
        self.assertEqual(len(loader.load_elements()), 2)

    def test_top_level_shape_is_a_format_error(self) -> None:
        for payload in ([], {"elements": {}}, {"items": []}):
            path = self.write_json("elements.json", payload)
            with self.assertRaises(FormatError):
                DataLoader(path).load_elements()

    def test_invalid_json_is_a_format_error(self) -> None:
        path = self.root / "elements.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(FormatError):
            DataLoader(path).load_elements()

    def test_undecodable_bytes_are_a_format_error(self) -> None:
        path = self.root / "elements.json"
        path.write_bytes(b'{"elements": [\xff]}')
        with self.assertRaises(FormatError) as ctx:
            DataLoader(path).load_elements()
        self.assertIn("UTF-8", str(ctx.exception))
        with self.assertRaises(FormatError):
            DataLoader(path.as_uri()).load_elements()

    def test_http_error_is_a_resource_error(self) -> None:
        url = "http://127.0.0.1/elements.json"
        failure = urllib.error.HTTPError(url, 404, "Not Found", {}, None)
        with mock.patch.object(loader_module.urllib.request, "urlopen", side_effect=failure):
            with self.assertRaises(ResourceError) as ctx:
                DataLoader(url).load_elements()
        self.assertEqual(ctx.exception.locator, url)
        self.assertIn("404", str(ctx.exception))

    def test_missing_file_is_a_resource_error(self) -> None:
        with self.assertRaises(ResourceError) as ctx:
            DataLoader(self.root / "nope.json").load_elements()
        self.assertTrue(ctx.exception.locator.endswith("nope.json"))

    def test_file_url_is_supported(self) -> None:
        path = self.write_json("elements.json", {"elements": [_element(6, "C", 2, 14, "nonmetal")]})
        elements = DataLoader(path.as_uri()).load_elements()
        self.assertEqual(elements[0].number, 6)

    def test_bundled_dataset_is_valid(self) -> None:
        loader = DataLoader()
        elements = loader.load_elements()
        self.assertEqual(elements[0].symbol, "H")
        positions = [e.position for e in elements]
        self.assertEqual(len(positions), len(set(positions)))
        self.assertEqual(len({e.number for e in elements}), len(elements))
        config = loader.load_config()
        for name in ("compact", "normal", "large"):
            config.layout(name)
            config.typography_for(name)
        for name in ("light", "dark", "colorful"):
            config.theme(name)

    def test_get_loader_is_shared(self) -> None:
        self.assertIs(get_loader(), get_loader())


class ElementValidationTests(unittest.TestCase):
    def assert_invalid(self, record: dict, field: str) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_elements([record])
        self.assertEqual(ctx.exception.index, 0)
        self.assertEqual(ctx.exception.field, field)

    def test_range_checks(self) -> None:
        self.assert_invalid(_element(0, "X", 1, 1, "x"), "number")
        self.assert_invalid(_element(1, "X", 8, 1, "x"), "period")
        self.assert_invalid(_element(1, "X", 0, 1, "x"), "period")
        self.assert_invalid(_element(1, "X", 1, 19, "x"), "group")
        self.assert_invalid(_element(1, "X", 1, 0, "x"), "group")

    def test_type_checks(self) -> None:
        self.assert_invalid(_element("1", "X", 1, 1, "x"), "number")
        self.assert_invalid(_element(True, "X", 1, 1, "x"), "number")
        self.assert_invalid(_element(1, "", 1, 1, "x"), "symbol")
        self.assert_invalid(_element(1, "X", 1.5, 1, "x"), "period")
        self.assert_invalid(_element(1, "X", 1, 1, ""), "category")
        record = _element(1, "X", 1, 1, "x")
        record["name"] = 7
        self.assert_invalid(record, "name")

    def test_first_violation_wins(self) -> None:
        record = _element(1, "", 9, 1, "x")
        self.assert_invalid(record, "symbol")
        del record["category"]
        self.assert_invalid(record, "category")

    def test_duplicate_atomic_number(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_elements([_element(1, "H", 1, 1, "x"), _element(1, "D", 1, 2, "x")])
        self.assertEqual((ctx.exception.index, ctx.exception.field), (1, "number"))

    def test_non_object_record(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_elements([["H"]])
        self.assertEqual(ctx.exception.index, 0)


class ConfigTests(LoaderTestCase):
    def test_valid_config(self) -> None:
        path = self.write_json("config.json", _config())
        loader = DataLoader(config_source=path)
        config = loader.load_config()
        self.assertIs(config, loader.load_config())
        self.assertEqual(config.layout("normal").box_width, 60)
        self.assertEqual(config.theme("light").stroke_width, 1)
        self.assertEqual(config.theme("light").category_color("alkali metal"), "#CCCCCC")
        self.assertEqual(config.typography_for("normal").symbol_size, 20)

    def test_missing_section(self) -> None:
        for section in ("layouts", "themes", "typography", "svg"):
            data = _config()
            del data[section]
            with self.assertRaises(ValidationError) as ctx:
                validate_config(data)
            self.assertEqual(ctx.exception.section, section)
            self.assertIn(section, str(ctx.exception))

    def test_malformed_layout(self) -> None:
        data = _config()
        data["layouts"]["tiny"] = {"boxWidth": -1, "boxHeight": 10, "gap": 0, "padding": 0}
        with self.assertRaises(ValidationError) as ctx:
            validate_config(data)
        self.assertEqual(ctx.exception.key, "tiny")
        self.assertEqual(ctx.exception.field, "boxWidth")

    def test_layout_accepts_zero_metrics(self) -> None:
        data = _config()
        data["layouts"]["flush"] = {"boxWidth": 10, "boxHeight": 10, "gap": 0, "padding": 0}
        self.assertEqual(validate_config(data).layout("flush").gap, 0)

    def test_typography_must_be_positive(self) -> None:
        data = _config()
        data["typography"]["normal"]["nameSize"] = 0
        with self.assertRaises(ValidationError) as ctx:
            validate_config(data)
        self.assertEqual(ctx.exception.section, "typography")
        self.assertEqual(ctx.exception.field, "nameSize")

    def test_theme_must_be_object(self) -> None:
        data = _config()
        data["themes"]["broken"] = "red"
        with self.assertRaises(ValidationError):
            validate_config(data)

    def test_non_object_config_is_format_error(self) -> None:
        with self.assertRaises(FormatError):
            validate_config([1, 2, 3])

    def test_failed_config_is_not_cached(self) -> None:
        data = _config()
        del data["svg"]
        path = self.write_json("config.json", data)
        loader = DataLoader(config_source=path)
        with self.assertRaises(ValidationError):
            loader.load_config()
        self.assertIsNone(loader.config)
        self.write_json("config.json", _config())
        self.assertIn("normal", loader.load_config().layouts)


class QueryTests(LoaderTestCase):
    def test_queries_before_load(self) -> None:
        loader = DataLoader()
        self.assertIsNone(loader.get_element(1))
        self.assertEqual(loader.get_elements_by_category("alkali"), [])
        self.assertEqual(loader.get_categories(), [])

    def test_queries_after_load(self) -> None:
        path = self.write_json(
            "elements.json",
            {
                "elements": [
                    _element(3, "Li", 2, 1, "alkali"),
                    _element(2, "He", 1, 18, "noble"),
                    _element(11, "Na", 3, 1, "alkali"),
                ]
            },
        )
        loader = DataLoader(path)
        loader.load_elements()
        self.assertEqual(loader.get_categories(), ["alkali", "noble"])
        self.assertEqual([e.symbol for e in loader.get_elements_by_category("alkali")], ["Li", "Na"])
        self.assertEqual(loader.get_elements_by_category("halogen"), [])
        self.assertEqual(loader.get_element(2).symbol, "He")
        self.assertIsNone(loader.get_element(99))


if __name__ == "__main__":
    unittest.main()
