# openapi_cli.py
# Writes the API's OpenAPI document to a JSON file (default: openapi.json).
# Usage: python -m salesnav.openapi_cli --out docs/openapi.json

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from salesnav.logging_config import get_logger

logger = get_logger(__name__)


def build_openapi(server_url: Optional[str] = None) -> Dict[str, Any]:
    # keep the FastAPI import local so `--help` stays fast
    from salesnav.app import app

    doc = dict(app.openapi())
    if server_url:
        doc["servers"] = [{"url": server_url}]
    return doc


def write_openapi(out_path: Path, server_url: Optional[str] = None) -> Dict[str, Any]:
    doc = build_openapi(server_url)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info("openapi_written", path=str(out_path), paths=len(doc.get("paths", {})))
    return doc


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export the SalesNav Session API OpenAPI document.")
    parser.add_argument("--out", default="openapi.json", help="Output JSON path.")
    parser.add_argument("--server", default=None, help="Server URL recorded in the document, e.g. http://localhost:8000")
    args = parser.parse_args(argv)

    doc = write_openapi(Path(args.out), server_url=args.server)
    print(f"OpenAPI written | path={args.out} paths={len(doc.get('paths', {}))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
