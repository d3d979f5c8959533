from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from rojak.engine.types import Card

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e


def _schema_errors(validator: Draft202012Validator, instance: object) -> list[str]:
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    out: list[str] = []
    for err in errors[:10]:
        loc = "/".join(str(p) for p in err.absolute_path)
        out.append(f"- {loc}: {err.message}")
    return out


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = _schema_errors(validator, instance)
    if errors:
        raise ContentError("\n".join([f"Schema validation failed for {context}:", *errors]))


def _looks_like_content(line: str) -> bool:
    # Stray HTML or long prose lines are not worth a warning.
    return not line.startswith("<") and len(line) < 100


def parse_cards_csv(
    csv_text: object,
    schema: Mapping[str, object] | None = None,
    *,
    strict: bool = False,
) -> list[Card]:
    """Parse ``front,back`` rows into cards.

    The first line is a header and is skipped. Each row is split on its first
    comma only, so the answer may itself contain commas. Rows without a comma
    or with an empty field are dropped; survivors get sequential ids from 0.

    With ``strict`` set, the first bad row raises ``ContentError`` instead.
    """
    if not csv_text or not isinstance(csv_text, str):
        logger.error("Invalid CSV text provided")
        return []

    validator = Draft202012Validator(schema) if schema is not None else None
    lines = csv_text.strip().split("\n")
    cards: list[Card] = []

    for i, raw_line in enumerate(lines[1:], start=1):
        line = raw_line.strip()
        if not line:
            continue

        front, sep, back = line.partition(",")
        if not sep:
            if strict:
                raise ContentError(f"Line {i} has no comma: {line[:100]}")
            if _looks_like_content(line):
                logger.warning("Line %d has no comma: %s", i, line)
            continue

        front = front.strip()
        back = back.strip()
        if not front or not back:
            if strict:
                raise ContentError(f"Line {i} has an empty field: {line}")
            logger.warning("Line %d has an empty field: %s", i, line)
            continue

        record = {"id": len(cards), "front": front, "back": back}
        if strict and schema is not None:
            validate_json(record, schema, context=f"line {i}")
        elif validator is not None:
            errors = _schema_errors(validator, record)
            if errors:
                logger.warning("Line %d failed validation:\n%s", i, "\n".join(errors))
                continue
        cards.append(Card(id=len(cards), front=front, back=back))

    logger.info("Total cards parsed: %d", len(cards))
    return cards


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_card_schema(self) -> Mapping[str, object]:
        schema = _load_json(self._schema_dir / "card.schema.json")
        if not isinstance(schema, dict):
            raise ContentError("card.schema.json must be an object")
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ContentError(f"Invalid card schema: {e.message}") from e
        return schema

    def load_cards(self, path: Path | None = None) -> list[Card]:
        cards_path = path or self._data_dir / "cards.csv"
        text = _load_text(cards_path)
        cards = parse_cards_csv(text, self.load_card_schema())
        if not cards:
            raise ContentError(f"No playable cards in {cards_path}")
        return cards

    def validate_all(self) -> None:
        """Check the bundled deck; unlike ``load_cards`` no row may be dropped."""
        cards_path = self._data_dir / "cards.csv"
        cards = parse_cards_csv(_load_text(cards_path), self.load_card_schema(), strict=True)
        if not cards:
            raise ContentError(f"No playable cards in {cards_path}")
