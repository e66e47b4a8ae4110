"""Tests for the $localize translation inliner."""

import json

import pytest

from lingobox.i18n.inliner import (
    SET_LOCALE_TEMPLATE,
    LocaleTranslation,
    TemplateSyntaxError,
    TranslationInliner,
    cook,
    inline_code,
    parse_message,
    render,
    scan_template,
    shift_source_map,
)
from lingobox.i18n.models import (
    DiagnosticSeverity,
    I18nOptions,
    InlineRequest,
    LocaleOptions,
    MissingTranslationPolicy,
)


def _translation(table, policy=MissingTranslationPolicy.WARNING, locale="fr"):
    return LocaleTranslation(
        locale=locale, translations=table, missing_translation=policy
    )


class TestTemplateScanning:
    """Test scanning of tagged template literals."""

    def test_scan_simple_template(self):
        code = "x = `abc`;"
        end, raw_parts, expressions = scan_template(code, 4)
        assert code[end:] == ";"
        assert raw_parts == ["abc"]
        assert expressions == []

    def test_scan_nested_expression(self):
        code = "`a${ {b: `c${d}`}.b }e`"
        end, raw_parts, expressions = scan_template(code, 0)
        assert end == len(code)
        assert raw_parts == ["a", "e"]
        assert expressions == [" {b: `c${d}`}.b "]

    def test_unterminated_template_raises(self):
        with pytest.raises(TemplateSyntaxError):
            scan_template("`never closed", 0)

    def test_cook_escapes(self):
        assert cook(r"a\nbA\x42\`") == "a\nbAB`"


class TestParseMessage:
    """Test message metadata and placeholder parsing."""

    def test_custom_id_meaning_and_description(self):
        message = parse_message([":site|An intro@@introHeader:Hello"], [])
        assert message.id == "introHeader"
        assert message.meaning == "site"
        assert message.description == "An intro"
        assert message.text == "Hello"

    def test_text_is_id_without_custom_id(self):
        message = parse_message(["Hello ", "!"], ["name"])
        assert message.id == "Hello {$PH}!"
        assert message.placeholders == ["PH"]

    def test_named_placeholders(self):
        message = parse_message(
            [":@@greet:Hi ", ":FIRST: and ", ":LAST:"], ["a", "b"]
        )
        assert message.placeholders == ["FIRST", "LAST"]
        assert message.text == "Hi {$FIRST} and {$LAST}"

    def test_default_placeholder_names_are_indexed(self):
        message = parse_message(["", " ", ""], ["a", "b"])
        assert message.placeholders == ["PH", "PH_1"]


class TestRender:
    """Test output rendering for both syntax modes."""

    def test_template_literal(self):
        assert render(["Hi ", 0, "!"], ["name"], es5=False) == "`Hi ${name}!`"

    def test_template_literal_escapes(self):
        assert render(["a`b${c"], [], es5=False) == "`a\\`b\\${c`"

    def test_es5_concatenation(self):
        assert render(["Hi ", 0, "!"], ["name"], es5=True) == '("Hi " + (name) + "!")'

    def test_es5_single_string(self):
        assert render(["Bonjour"], [], es5=True) == '"Bonjour"'


class TestInlineCode:
    """Test replacement of every $localize call in a script."""

    def test_translates_message(self):
        code = "const t = $localize`:@@title:Hello`;"
        translation = _translation({"title": "Bonjour"})
        assert inline_code(code, translation, es5=False) == "const t = `Bonjour`;"
        assert translation.diagnostics == []

    def test_translation_reorders_placeholders(self):
        code = "f($localize`:@@pair:${a}:FIRST: then ${b}:SECOND:`)"
        translation = _translation({"pair": "{$SECOND} avant {$FIRST}"})
        assert inline_code(code, translation, es5=False) == "f(`${b} avant ${a}`)"

    @pytest.mark.parametrize(
        ("policy", "severity"),
        [
            (MissingTranslationPolicy.ERROR, DiagnosticSeverity.ERROR),
            (MissingTranslationPolicy.WARNING, DiagnosticSeverity.WARNING),
        ],
    )
    def test_missing_translation_policy(self, policy, severity):
        translation = _translation({}, policy, locale="de")

        output = inline_code("$localize`:@@title:Hello`", translation, es5=False)

        assert output == "`Hello`"
        assert len(translation.diagnostics) == 1
        assert translation.diagnostics[0].type is severity
        assert translation.diagnostics[0].message == (
            'No translation found for "title" ("Hello") in locale "de".'
        )

    def test_missing_translation_ignored(self):
        translation = _translation({}, MissingTranslationPolicy.IGNORE)
        assert inline_code("$localize`Hello`", translation, es5=False) == "`Hello`"
        assert translation.diagnostics == []

    def test_unknown_placeholder_is_error(self):
        translation = _translation({"greet": "Salut {$OTHER}"})

        output = inline_code(
            "$localize`:@@greet:Hi ${n}:NAME:`", translation, es5=False
        )

        assert output == "`Hi ${n}`"
        assert translation.diagnostics[0].type is DiagnosticSeverity.ERROR
        assert "placeholder name mismatch" in translation.diagnostics[0].message

    def test_malformed_template_is_error(self):
        translation = _translation({})

        output = inline_code("x = $localize`never closed", translation, es5=False)

        assert output == "x = $localize`never closed"
        assert translation.diagnostics[0].type is DiagnosticSeverity.ERROR
        assert translation.diagnostics[0].message.startswith(
            "Malformed $localize message"
        )

    def test_identifier_containing_localize_is_untouched(self):
        translation = _translation({})
        code = "my$localize`x`"
        assert inline_code(code, translation, es5=False) == code


class TestShiftSourceMap:
    def test_prefixes_generated_line(self):
        shifted = shift_source_map(json.dumps({"version": 3, "mappings": "AAAA"}))
        assert json.loads(shifted)["mappings"] == ";AAAA"

    def test_invalid_json_returns_none(self):
        assert shift_source_map("not json") is None


class TestTranslationInliner:
    """Test per-locale output files written by the inliner."""

    @pytest.fixture
    def options(self):
        return I18nOptions(
            source_locale="en-US",
            inline_locales=["en-US", "fr"],
            locales={
                "fr": LocaleOptions(translation={"title": "Bonjour"}, subpath="fr-FR")
            },
        )

    def test_writes_each_locale(self, tmp_path, options):
        request = InlineRequest(
            filename="main.js",
            code="a = $localize`:@@title:Hello`;",
            output_path=tmp_path,
            missing_translation=MissingTranslationPolicy.ERROR,
        )

        result = TranslationInliner().inline(request, options)

        assert result.file == "main.js"
        assert result.diagnostics == []
        assert (tmp_path / "en-US" / "main.js").read_text() == "a = `Hello`;"
        assert (tmp_path / "fr-FR" / "main.js").read_text() == "a = `Bonjour`;"

    def test_code_without_localize_is_copied(self, tmp_path, options):
        request = InlineRequest(
            filename="vendor.js", code="plain();", map="{}", output_path=tmp_path
        )

        result = TranslationInliner().inline(request, options)

        assert result.diagnostics == []
        for subpath in ("en-US", "fr-FR"):
            assert (tmp_path / subpath / "vendor.js").read_text() == "plain();"
            assert (tmp_path / subpath / "vendor.js.map").read_text() == "{}"

    def test_set_locale_applies_without_localize(self, tmp_path, options):
        request = InlineRequest(
            filename="main.js",
            code="bootstrap();\n",
            map=json.dumps({"version": 3, "mappings": "AAAA"}),
            output_path=tmp_path,
            set_locale=True,
        )

        result = TranslationInliner().inline(request, options)

        assert result.diagnostics == []
        for subpath, locale in (("en-US", "en-US"), ("fr-FR", "fr")):
            output = (tmp_path / subpath / "main.js").read_text()
            assert output == SET_LOCALE_TEMPLATE.format(locale=locale) + "\nbootstrap();\n"
            source_map = json.loads((tmp_path / subpath / "main.js.map").read_text())
            assert source_map["mappings"] == ";AAAA"

    def test_set_locale_prefix_and_map_shift(self, tmp_path, options):
        request = InlineRequest(
            filename="main.js",
            code="a = $localize`:@@title:Hello`;",
            map=json.dumps({"version": 3, "mappings": "AAAA"}),
            output_path=tmp_path,
            set_locale=True,
        )

        TranslationInliner().inline(request, options)

        output = (tmp_path / "fr-FR" / "main.js").read_text()
        assert output == SET_LOCALE_TEMPLATE.format(locale="fr") + "\na = `Bonjour`;"
        assert output.startswith(
            'var $localize=Object.assign(void 0===$localize?{}:$localize,{locale:"fr"});'
        )
        source_map = json.loads((tmp_path / "fr-FR" / "main.js.map").read_text())
        assert source_map["mappings"] == ";AAAA"

    def test_flat_output(self, tmp_path):
        options = I18nOptions(
            inline_locales=["fr"],
            locales={"fr": LocaleOptions(translation={"title": "Bonjour"})},
            flat_output=True,
        )
        request = InlineRequest(
            filename="main.js", code="$localize`:@@title:Hello`", output_path=tmp_path
        )

        TranslationInliner().inline(request, options)

        assert (tmp_path / "main.js").read_text() == "`Bonjour`"

    def test_es5_output(self, tmp_path, options):
        request = InlineRequest(
            filename="main.js",
            code="a = $localize`:@@title:Hello`;",
            es5=True,
            output_path=tmp_path,
        )

        TranslationInliner().inline(request, options)

        assert (tmp_path / "fr-FR" / "main.js").read_text() == 'a = "Bonjour";'
