# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from ..domain.models import BlameResult

FORMATS = ("json", "ndjson", "csv")
CSV_FIELDS = ["line", "revision", "author", "date"]


class BlameReportService:
    """
    Renders a BlameResult as human- and machine-readable text (JSON/NDJSON/CSV).

    Notes:
      - JSON (default): one object with the command line, status and entries.
      - NDJSON: one entry per line.
      - CSV: one row per line; stable column order.
    """

    def _as_dict(self, result: BlameResult) -> dict[str, Any]:
        return {
            "command_line": result.command_line,
            "success": result.success,
            "error_message": result.error_message,
            "provider_message": result.provider_message,
            "entries": [asdict(e) for e in result.entries],
        }

    def render(self, result: BlameResult, fmt: str = "json") -> str:
        """
        Raises:
            ValueError: if an unsupported format is requested.
        """
        fmt = (fmt or "json").lower()

        if fmt == "json":
            return json.dumps(self._as_dict(result), ensure_ascii=False, indent=2)

        if fmt == "ndjson":
            lines = (json.dumps(asdict(e), ensure_ascii=False) for e in result.entries)
            text = "\n".join(lines)
            return text + ("\n" if text else "")

        if fmt == "csv":
            buf = io.StringIO()
            writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS, lineterminator="\n")
            writer.writeheader()
            for e in result.entries:
                writer.writerow(
                    {
                        "line": e.line_number,
                        "revision": e.revision,
                        "author": e.author,
                        "date": e.date,
                    }
                )
            return buf.getvalue()

        raise ValueError(f"Unsupported format: {fmt}")

    def write(self, result: BlameResult, out: Path, fmt: str = "json") -> Path:
        """Write the rendered result to `out`, creating parent dirs. Returns the path."""
        text = self.render(result, fmt)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8", newline="")
        return out
