"""Default transformation step: inline ``$localize`` messages per locale.

Messages are tagged template literals such as::

    $localize`:site header|An introduction@@introHeader:Hello ${name}:NAME:!`

The ``@@id`` in the leading metadata block selects the translation; a message
without an explicit id is keyed by its source text. Translations reference
placeholders as ``{$NAME}``.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from lingobox.adapters import create_file_adapter
from lingobox.i18n.models import (
    SOURCE_MAP_SUFFIX,
    Diagnostic,
    I18nOptions,
    InlineRequest,
    MissingTranslationPolicy,
    TransformResult,
)
from lingobox.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)

LOCALIZE_NAME = "$localize"
SET_LOCALE_TEMPLATE = (
    'var $localize=Object.assign(void 0===$localize?{{}}:$localize,{{locale:"{locale}"}});'
)

_LOCALIZE_TAG = re.compile(r"(?<![\w$])\$localize\s*`")
_TRANSLATION_PLACEHOLDER = re.compile(r"\{\$([^}]+)\}")
_ESCAPE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
    "\r\n": "",
}


class TemplateSyntaxError(ValueError):
    """Raised when a ``$localize`` template literal cannot be scanned."""


def cook(raw: str) -> str:
    """Decode JavaScript escape sequences in a raw template chunk."""

    def replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[escape]
        if escape.startswith("u{"):
            return chr(int(escape[2:-1], 16))
        if escape[0] in "ux" and len(escape) > 1:
            return chr(int(escape[1:], 16))
        return escape

    return _ESCAPE.sub(replace, raw)


def _skip_string(code: str, start: int) -> int:
    quote = code[start]
    i = start + 1
    while i < len(code):
        ch = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n":
            break
        i += 1
    raise TemplateSyntaxError(f"Unterminated string literal at offset {start}")


def _scan_expression(code: str, start: int) -> int:
    """Return the index of the ``}`` closing a ``${`` expression."""
    depth = 0
    i = start
    while i < len(code):
        ch = code[i]
        if ch in "'\"":
            i = _skip_string(code, i)
            continue
        if ch == "`":
            i = scan_template(code, i)[0]
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    raise TemplateSyntaxError(f"Unterminated template expression at offset {start}")


def scan_template(code: str, start: int) -> tuple[int, list[str], list[str]]:
    """Scan the template literal whose opening backtick is at ``start``.

    Returns the index just past the closing backtick, the raw text chunks and
    the source text of the interpolated expressions.
    """
    raw_parts: list[str] = []
    expressions: list[str] = []
    i = start + 1
    chunk_start = i
    while i < len(code):
        ch = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "`":
            raw_parts.append(code[chunk_start:i])
            return i + 1, raw_parts, expressions
        if ch == "$" and code[i + 1 : i + 2] == "{":
            raw_parts.append(code[chunk_start:i])
            end = _scan_expression(code, i + 2)
            expressions.append(code[i + 2 : end])
            i = end + 1
            chunk_start = i
            continue
        i += 1
    raise TemplateSyntaxError(f"Unterminated template literal at offset {start}")


def _split_block(raw: str) -> tuple[str | None, str]:
    """Split a leading ``:block:`` from a raw chunk."""
    if not raw.startswith(":"):
        return None, raw
    i = 1
    while i < len(raw):
        if raw[i] == "\\":
            i += 2
            continue
        if raw[i] == ":":
            return raw[1:i], raw[i + 1 :]
        i += 1
    return None, raw


@dataclass
class ParsedMessage:
    """A ``$localize`` message with its placeholders."""

    id: str
    text: str
    segments: list[str]
    placeholders: list[str]
    expressions: list[str]
    meaning: str | None = None
    description: str | None = None

    def source_pieces(self) -> list[str | int]:
        pieces: list[str | int] = [self.segments[0]]
        for index, segment in enumerate(self.segments[1:]):
            pieces.extend([index, segment])
        return pieces


def parse_message(raw_parts: list[str], expressions: list[str]) -> ParsedMessage:
    """Build a message from the raw chunks of a ``$localize`` template."""
    meta, first = _split_block(raw_parts[0])
    custom_id = meaning = description = None
    if meta is not None:
        meta, _, custom_id = meta.partition("@@")
        if "|" in meta:
            meaning, _, description = meta.partition("|")
        else:
            description = meta or None
        custom_id = custom_id or None

    segments = [cook(first)]
    placeholders: list[str] = []
    for index, raw in enumerate(raw_parts[1:]):
        block, rest = _split_block(raw)
        default_name = "PH" if index == 0 else f"PH_{index}"
        name = block.split("@@")[0] if block else default_name
        placeholders.append(name)
        segments.append(cook(rest))

    text = segments[0] + "".join(
        f"{{${name}}}{segment}" for name, segment in zip(placeholders, segments[1:])
    )
    return ParsedMessage(
        id=custom_id or text,
        text=text,
        segments=segments,
        placeholders=placeholders,
        expressions=expressions,
        meaning=meaning,
        description=description,
    )


def escape_template(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def render(pieces: list[str | int], expressions: list[str], es5: bool) -> str:
    """Render translated pieces as a template literal or ES5 concatenation."""
    if not es5:
        body = "".join(
            escape_template(piece)
            if isinstance(piece, str)
            else f"${{{expressions[piece]}}}"
            for piece in pieces
        )
        return f"`{body}`"

    rendered: list[str] = []
    for position, piece in enumerate(pieces):
        if isinstance(piece, int):
            rendered.append(f"({expressions[piece]})")
        elif piece or position == 0:
            rendered.append(json.dumps(piece))
    if len(rendered) == 1:
        return rendered[0]
    return "(" + " + ".join(rendered) + ")"


@dataclass
class LocaleTranslation:
    """Per-locale state for one inline pass."""

    locale: str
    translations: dict[str, str]
    missing_translation: MissingTranslationPolicy
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def translate(self, message: ParsedMessage) -> list[str | int]:
        translation = self.translations.get(message.id)
        if translation is None:
            self._report_missing(message)
            return message.source_pieces()

        pieces: list[str | int] = []
        position = 0
        for match in _TRANSLATION_PLACEHOLDER.finditer(translation):
            name = match.group(1)
            if name not in message.placeholders:
                self.diagnostics.append(
                    Diagnostic.error(
                        f'There is a placeholder name mismatch with the translation provided for the message "{message.id}" ("{message.text}") in locale "{self.locale}". '
                        f"The translation contains a placeholder with name {name}, which does not exist in the message."
                    )
                )
                return message.source_pieces()
            pieces.append(translation[position : match.start()])
            pieces.append(message.placeholders.index(name))
            position = match.end()
        pieces.append(translation[position:])
        return pieces

    def _report_missing(self, message: ParsedMessage) -> None:
        text = (
            f'No translation found for "{message.id}" ("{message.text}") '
            f'in locale "{self.locale}".'
        )
        if self.missing_translation is MissingTranslationPolicy.ERROR:
            self.diagnostics.append(Diagnostic.error(text))
        elif self.missing_translation is MissingTranslationPolicy.WARNING:
            self.diagnostics.append(Diagnostic.warning(text))


def inline_code(code: str, translation: LocaleTranslation, es5: bool) -> str:
    """Replace every ``$localize`` tagged template in ``code``."""
    output: list[str] = []
    position = 0
    while True:
        match = _LOCALIZE_TAG.search(code, position)
        if match is None:
            break
        backtick = match.end() - 1
        try:
            end, raw_parts, expressions = scan_template(code, backtick)
        except TemplateSyntaxError as e:
            translation.diagnostics.append(
                Diagnostic.error(f"Malformed $localize message: {e}")
            )
            output.append(code[position : match.end()])
            position = match.end()
            continue

        message = parse_message(raw_parts, expressions)
        output.append(code[position : match.start()])
        output.append(render(translation.translate(message), expressions, es5))
        position = end

    output.append(code[position:])
    return "".join(output)


def shift_source_map(source_map: str, lines: int = 1) -> str | None:
    """Offset a source map's generated lines, or None if it is not JSON."""
    try:
        data = json.loads(source_map)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get("mappings"), str):
        return None
    data["mappings"] = ";" * lines + data["mappings"]
    return json.dumps(data)


class TranslationInliner:
    """Write one localized copy of a script for every inlined locale."""

    def __init__(self, file_adapter: FileAdapterProtocol | None = None) -> None:
        self.file_adapter = file_adapter or create_file_adapter()

    def inline(self, request: InlineRequest, i18n: I18nOptions) -> TransformResult:
        result = TransformResult(file=request.filename)

        if LOCALIZE_NAME not in request.code and not request.set_locale:
            for locale in i18n.inline_locales:
                self._write(request, i18n, locale, request.code, request.map)
            return result

        for locale in i18n.inline_locales:
            is_source = locale == i18n.source_locale
            translation = LocaleTranslation(
                locale=locale,
                translations=i18n.translations_for(locale),
                missing_translation=(
                    MissingTranslationPolicy.IGNORE
                    if is_source
                    else MissingTranslationPolicy(request.missing_translation)
                ),
            )
            code = inline_code(request.code, translation, request.es5)
            source_map = request.map

            if request.set_locale:
                code = SET_LOCALE_TEMPLATE.format(locale=locale) + "\n" + code
                if source_map is not None:
                    shifted = shift_source_map(source_map)
                    if shifted is None:
                        translation.diagnostics.append(
                            Diagnostic.warning(
                                f"Source map for '{request.filename}' is not valid JSON and was copied unchanged."
                            )
                        )
                    else:
                        source_map = shifted

            self._write(request, i18n, locale, code, source_map)
            result.diagnostics.extend(translation.diagnostics)

        return result

    def _write(
        self,
        request: InlineRequest,
        i18n: I18nOptions,
        locale: str,
        code: str,
        source_map: str | None,
    ) -> None:
        output_file = (
            Path(request.output_path) / i18n.output_subpath(locale) / request.filename
        )
        self.file_adapter.write_text(output_file, code)
        if source_map is not None:
            self.file_adapter.write_text(
                output_file.with_name(output_file.name + SOURCE_MAP_SUFFIX), source_map
            )
        logger.debug("Wrote localized file: %s", output_file)


def create_translation_inliner(
    file_adapter: FileAdapterProtocol | None = None,
) -> TranslationInliner:
    """Create translation inliner instance."""
    return TranslationInliner(file_adapter)
