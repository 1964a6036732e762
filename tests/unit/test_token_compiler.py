"""Tests for design token compilation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from anticustom.core.errors import TokenDocumentError
from anticustom_ui.specs.tokens import (
    DEFAULT_SCALE_SCHEMA,
    ScaleDefinition,
    ScalePosition,
    TokenCategory,
)
from anticustom_ui.themes import (
    compile_colorways,
    compile_scale,
    compile_tokens,
    load_scale_schema,
    load_token_document,
    parse_token_document,
)
from anticustom_ui.themes.colors import generate_shades, hex_to_hsl, hsl_to_hex, parse_hex
from anticustom_ui.themes.token_compiler import format_number, round_half_up, shadow_value


class TestNumberHelpers:
    def test_round_half_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(14.25, 1) == 14.3
        assert round_half_up(10.6667) == 11

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(24.0, "24"), (14.2, "14.2"), (3, "3"), (0.1, "0.1"), (True, "1"), ("2rem", "2rem")],
    )
    def test_format_number(self, value, expected: str) -> None:
        assert format_number(value) == expected


class TestCompileScale:
    """Geometric scale evaluation."""

    def test_position_one(self) -> None:
        values = compile_scale(
            ScaleDefinition(base_size=16, scale=1.5), [ScalePosition(name="l", position=1)]
        )
        assert values == {"l": 24}

    def test_negative_positions_round(self) -> None:
        values = compile_scale(
            ScaleDefinition(base_size=16, scale=1.5),
            [ScalePosition(name="xs", position=-2), ScalePosition(name="s", position=-1)],
        )
        assert values == {"xs": 7, "s": 11}

    def test_enabled_override_wins(self) -> None:
        values = compile_scale(
            ScaleDefinition(base_size=16, scale=1.5),
            [ScalePosition(name="l", position=1)],
            {"l": {"enabled": True, "value": 99}},
        )
        assert values == {"l": 99}

    @pytest.mark.parametrize(
        "override",
        [{"enabled": False, "value": 99}, {"value": 99}, {"enabled": True}, "99"],
    )
    def test_inactive_override_ignored(self, override) -> None:
        values = compile_scale(
            ScaleDefinition(base_size=16, scale=1.5),
            [ScalePosition(name="l", position=1)],
            {"l": override},
        )
        assert values == {"l": 24}

    def test_one_decimal(self) -> None:
        values = compile_scale(
            ScaleDefinition(base_size=16, scale=1.125),
            [ScalePosition(name="s", position=-1)],
            digits=1,
        )
        assert values == {"s": 14.2}


class TestCompileTokens:
    """Whole-document compilation."""

    def test_empty_document_is_empty_table(self) -> None:
        assert len(compile_tokens({})) == 0

    def test_spacing_defaults(self) -> None:
        table = compile_tokens({"spacing": {}})

        assert table.as_dict() == {
            "--space-xxs": "5px",
            "--space-xs": "7px",
            "--space-s": "11px",
            "--space-m": "16px",
            "--space-l": "24px",
            "--space-xl": "36px",
            "--space-xxl": "54px",
        }

    def test_spacing_overrides(self) -> None:
        table = compile_tokens(
            {
                "spacing": {
                    "baseSize": "20",
                    "scale": 2,
                    "sizes": {
                        "l": {"enabled": True, "value": 99},
                        "m": {"enabled": False, "value": 1},
                    },
                }
            }
        )

        assert table.get("--space-m") == "20px"
        assert table.get("--space-l") == "99px"
        assert table.get("--space-xl") == "80px"

    def test_override_with_unit_is_verbatim(self) -> None:
        table = compile_tokens(
            {
                "spacing": {
                    "sizes": {
                        "l": {"enabled": True, "value": "2rem"},
                        "xl": {"enabled": True, "value": "40"},
                    }
                },
                "radius": {"sizes": {"pill": {"value": "999em"}}},
            }
        )

        assert table.get("--space-l") == "2rem"
        assert table.get("--space-xl") == "40px"
        assert table.get("--radius-pill") == "999em"

    def test_text_uses_one_decimal(self) -> None:
        table = compile_tokens({"typography": {"text": {}}})

        assert table.as_dict() == {
            "--text-xs": "12.6px",
            "--text-s": "14.2px",
            "--text-m": "16px",
            "--text-l": "18px",
            "--text-xl": "20.3px",
        }

    def test_headings_and_extras(self) -> None:
        table = compile_tokens(
            {
                "typography": {
                    "headings": {
                        "sizes": {
                            "h1": {"lineHeight": 1.2, "letterSpacing": -0.02, "weight": 700},
                        }
                    }
                }
            }
        )

        assert table.get("--heading-1") == "177px"
        assert table.get("--heading-2") == "110px"
        assert table.get("--heading-6") == "16px"
        assert table.get("--heading-1-line-height") == "1.2"
        assert table.get("--heading-1-letter-spacing") == "-0.02em"
        assert table.get("--heading-1-weight") == "700"
        assert table.get("--heading-2-weight") is None

    def test_colors_with_hues(self) -> None:
        doc = {
            "color": {
                "hues": {"light": {"value": 80}, "dark": 20, "off": {"value": 50, "enabled": False}},
                "sections": {
                    "brand": {
                        "colors": {
                            "primary": "#ff0000",
                            "muted": {"color": "var(--x)"},
                            "hidden": {"color": "#000000", "enabled": False},
                        }
                    }
                },
            }
        }
        table = compile_tokens(doc)

        assert [t.variable_name for t in table] == [
            "--primary",
            "--primary-light",
            "--primary-dark",
            "--muted",
        ]
        assert table.get("--primary-light") == "#ff9999"
        assert table.get("--primary-dark") == "#660000"
        assert all(t.category == TokenCategory.COLORS for t in table)

    def test_color_sections_as_list(self) -> None:
        table = compile_tokens({"color": {"sections": [{"colors": {"ink": "#111"}}]}})
        assert table.as_dict() == {"--ink": "#111"}

    def test_borders_and_radius(self) -> None:
        table = compile_tokens(
            {
                "borders": {
                    "sizes": {
                        "thin": {"value": 1},
                        "off": {"value": 3, "enabled": False},
                        "unset": {"enabled": True},
                    }
                },
                "radius": {"sizes": {"m": {"value": 8}}},
            }
        )
        assert table.as_dict() == {"--border-thin": "1px", "--radius-m": "8px"}

    def test_shadows(self) -> None:
        table = compile_tokens(
            {
                "shadows": {
                    "sm": {"x": 0, "y": 2, "blur": 4, "spread": 0, "opacity": 0.1},
                    "md": {"x": 0, "y": 2},
                    "lg": {"x": 0, "y": 8, "blur": 16, "spread": 0, "opacity": 0.2, "enabled": False},
                }
            }
        )
        assert table.as_dict() == {"--shadow-sm": "0px 2px 4px 0px rgba(0,0,0,0.1)"}

    def test_shadow_value_requires_every_component(self) -> None:
        assert shadow_value({"x": 1, "y": 1, "blur": 1, "spread": 1}) is None

    def test_section_order(self) -> None:
        doc = {
            "radius": {"sizes": {"m": {"value": 8}}},
            "shadows": {"sm": {"x": 0, "y": 1, "blur": 2, "spread": 0, "opacity": 0.1}},
            "borders": {"sizes": {"thin": {"value": 1}}},
            "color": {"sections": {"a": {"colors": {"ink": "#111"}}}},
            "typography": {"headings": {}, "text": {}},
            "spacing": {},
        }
        categories = []
        for token in compile_tokens(doc):
            if not categories or categories[-1] != token.category:
                categories.append(token.category)

        assert categories == [
            TokenCategory.SPACING,
            TokenCategory.TYPOGRAPHY,
            TokenCategory.COLORS,
            TokenCategory.BORDERS,
            TokenCategory.SHADOWS,
            TokenCategory.RADIUS,
        ]

    @pytest.mark.parametrize(
        "doc",
        [
            {"spacing": []},
            {"typography": "big"},
            {"spacing": {"baseSize": "big"}},
            {"spacing": {"scale": True}},
            {"color": {"sections": "nope"}},
        ],
    )
    def test_malformed_documents_raise(self, doc) -> None:
        with pytest.raises(TokenDocumentError):
            compile_tokens(doc)

    def test_non_mapping_document_raises(self) -> None:
        with pytest.raises(TokenDocumentError):
            compile_tokens([])  # type: ignore[arg-type]


class TestColorways:
    def test_collects_non_empty_values(self) -> None:
        colorways = compile_colorways(
            {
                "color": {
                    "colorways": {
                        "primary": {"background": "var(--primary)", "opacity": 0.5, "empty": ""},
                        "blank": {"text": ""},
                    }
                }
            }
        )

        assert len(colorways) == 1
        assert colorways[0].name == "primary"
        assert colorways[0].values == {"background": "var(--primary)", "opacity": "0.5"}

    def test_top_level_fallback(self) -> None:
        colorways = compile_colorways({"colorways": {"base": {"text": "#000"}}})
        assert [c.name for c in colorways] == ["base"]

    def test_non_mapping_entry_raises(self) -> None:
        with pytest.raises(TokenDocumentError, match="Colorway 'bad'"):
            compile_colorways({"colorways": {"bad": "red"}})

    def test_none(self) -> None:
        assert compile_colorways({}) == []


class TestColors:
    def test_parse_hex(self) -> None:
        assert parse_hex("#fff") == (1.0, 1.0, 1.0)
        assert parse_hex("000000") == (0.0, 0.0, 0.0)
        assert parse_hex("red") is None

    def test_hsl_round_trip_for_primary(self) -> None:
        assert hex_to_hsl("#ff0000") == (0.0, 100.0, 50.0)
        assert hsl_to_hex(0, 100, 50) == "#ff0000"

    def test_generate_shades(self) -> None:
        assert generate_shades("#f00", {"light": 80}) == {"light": "#ff9999"}
        assert list(generate_shades("#336699")) == [
            "ultra-light",
            "light",
            "semi-light",
            "semi-dark",
            "dark",
            "ultra-dark",
        ]
        assert generate_shades("var(--primary)") == {}


class TestLoading:
    """Reading token documents and scale schemas from disk."""

    def test_parse(self) -> None:
        assert parse_token_document('{"spacing": {}}') == {"spacing": {}}

    def test_parse_invalid_json(self) -> None:
        with pytest.raises(TokenDocumentError, match="Invalid JSON"):
            parse_token_document("{bad", source="tokens.json")

    def test_parse_non_object(self) -> None:
        with pytest.raises(TokenDocumentError, match="must be a JSON object"):
            parse_token_document("[1]")

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TokenDocumentError, match="Cannot read token document") as exc_info:
            load_token_document(tmp_path / "missing.json")
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"radius": {"sizes": {"s": {"value": 2}}}}))
        assert compile_tokens(load_token_document(path)).as_dict() == {"--radius-s": "2px"}

    def test_load_scale_schema(self, tmp_path: Path) -> None:
        path = tmp_path / "scale.json"
        path.write_text(
            json.dumps(
                {
                    "sizes": {
                        "spacingSizes": {"items": {"a": {"position": 0}, "b": {"position": 2}}},
                        "headingLevels": {
                            "items": {"display": {"position": 7, "cssKey": "display"}}
                        },
                    }
                }
            )
        )

        schema = load_scale_schema(path)

        assert [p.name for p in schema.spacing] == ["a", "b"]
        assert schema.text == DEFAULT_SCALE_SCHEMA.text
        assert schema.headings[0].css_key == "display"

        table = compile_tokens({"spacing": {}, "typography": {"headings": {"scale": 1}}}, schema)
        assert table.as_dict() == {"--space-a": "16px", "--space-b": "36px", "--display": "16px"}

    @pytest.mark.parametrize(
        "data",
        [
            {"spacingSizes": {"items": []}},
            {"spacingSizes": {"items": {"a": 3}}},
            {"textSizes": {"items": {"a": {"position": "far"}}}},
        ],
    )
    def test_invalid_scale_schema(self, tmp_path: Path, data) -> None:
        path = tmp_path / "scale.json"
        path.write_text(json.dumps(data))

        with pytest.raises(TokenDocumentError) as exc_info:
            load_scale_schema(path)
        assert exc_info.value.path == path
