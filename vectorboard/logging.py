from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional


@dataclass
class ImportLogger:
    """Collects parser diagnostics; ``flush`` writes them to ``destination``."""

    destination: Optional[Path] = None
    source: str = ""

    def __post_init__(self) -> None:
        self._lines: List[str] = []
        self.dropped_fields = 0
        self.dropped_entities = 0

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def note(self, message: str) -> None:
        self._lines.append(message)

    def field_dropped(self, entity: str, code: str, value: str) -> None:
        self.dropped_fields += 1
        self._lines.append(f"  drop field entity={entity:<10} code={code:>3} value={value!r}")

    def entity_dropped(self, entity: str, reason: str) -> None:
        self.dropped_entities += 1
        self._lines.append(f"  drop entity {entity:<10} | {reason}")

    def tier(self, name: str, count: int) -> None:
        self._lines.append(f"tier {name}: {count} command(s)")

    def census(self, counts: Mapping[str, int]) -> None:
        if not counts:
            self._lines.append("census: (no entities)")
            return
        self._lines.append("census:")
        for name, count in Counter(counts).most_common():
            self._lines.append(f"  {name:<12} x{count}")

    def flush(self) -> None:
        if not self._lines or self.destination is None:
            return
        header = [f"source={self.source}"] if self.source else []
        summary = f"dropped fields={self.dropped_fields} entities={self.dropped_entities}"
        text = "\n".join(header + self._lines + [summary]) + "\n"
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        self.destination.write_text(text, encoding="utf-8")
