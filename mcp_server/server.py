"""
D365 Labels — MCP Server.

Exposes label lookup over a local PackagesLocalDirectory tree to LLM
clients via the Model Context Protocol, so assistants can show friendly
names for fields, tables and controls instead of raw @File:Label ids.

Usage:
    python -m mcp_server --packages-dir /path/to/PackagesLocalDirectory

    Without --packages-dir the D365_PACKAGES_DIR env var is used.
"""

from __future__ import annotations

import logging
import sys

from mcp.server.fastmcp import FastMCP

from d365_labels.config import LabelConfig
from d365_labels.resolution.label_resolver import LabelResolver

# ── Globals ─────────────────────────────────────────────────────────────

_resolver: LabelResolver | None = None
mcp = FastMCP("d365-labels")


def configure(resolver: LabelResolver | None) -> None:
    """Install the resolver the tools delegate to."""
    global _resolver
    _resolver = resolver


def _label_resolver() -> LabelResolver:
    if _resolver is None:
        raise RuntimeError("Label resolver not initialized")
    return _resolver


# ── Tools ───────────────────────────────────────────────────────────────


@mcp.tool()
def get_label(label_id: str, language: str = "en-US", include_description: bool = False) -> dict:
    """Get the text of a single D365 label.

    Falls back to the en-US label file when the requested language has none.

    Args:
        label_id: Label reference in @LabelFileID:LabelID form (e.g. "@SYS:Company").
        language: Language code such as "en-US", "de-DE", "fr-FR".
        include_description: Also return the label's developer description.
    """
    result = _label_resolver().resolve_one(label_id, language)
    return result.to_dict(include_description=include_description)


@mcp.tool()
def get_labels_batch(label_ids: list[str], language: str = "en-US") -> dict:
    """Get the text of many D365 labels in one call.

    Prefer this over repeated get_label calls: each label file is read once
    per request. Unknown labels are listed in missingLabels and malformed
    references in invalidLabels.

    Args:
        label_ids: Label references in @LabelFileID:LabelID form.
        language: Language code such as "en-US".
    """
    if not label_ids:
        return {"error": "label_ids must contain at least one label reference"}
    batch = _label_resolver().resolve_batch(label_ids, language)
    return batch.to_dict(label_ids)


@mcp.tool()
def list_label_languages(package: str, model: str, label_file_id: str) -> dict:
    """List the languages a model ships for one label file.

    Args:
        package: Package folder name under PackagesLocalDirectory.
        model: Model folder name inside the package.
        label_file_id: Label file id (e.g. "SYS").
    """
    listing = _label_resolver().list_available_languages(package, model, label_file_id)
    if listing.error:
        return {"error": listing.error}
    return {"labelFileId": label_file_id, "languages": listing.items}


@mcp.tool()
def list_label_files(package: str, model: str, language: str = "en-US") -> dict:
    """List the label file ids a model ships for a language.

    Args:
        package: Package folder name under PackagesLocalDirectory.
        model: Model folder name inside the package.
        language: Language code such as "en-US".
    """
    listing = _label_resolver().list_available_label_files(package, model, language)
    if listing.error:
        return {"error": listing.error}
    return {"language": language, "labelFiles": listing.items}


@mcp.tool()
def clear_label_cache() -> dict:
    """Forget all parsed label files so edits on disk are picked up."""
    return {"cleared": _label_resolver().clear_cache()}


# ── Entry point ─────────────────────────────────────────────────────────

def main(argv: list[str] | None = None):
    import argparse

    parser = argparse.ArgumentParser(description="D365 Labels MCP Server")
    parser.add_argument("--packages-dir", help="PackagesLocalDirectory root (default: $D365_PACKAGES_DIR)")
    parser.add_argument("--batch-workers", type=int, help="Parallel label files per batch request")
    args = parser.parse_args(argv)

    # stdout carries the MCP stdio stream
    logging.basicConfig(level=logging.INFO, stream=sys.stderr,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = LabelConfig.from_env(packages_dir=args.packages_dir)
    if args.batch_workers:
        config.batch_workers = args.batch_workers
    if not config.packages_dir:
        print("Error: --packages-dir or D365_PACKAGES_DIR is required", file=sys.stderr)
        sys.exit(1)

    configure(LabelResolver(config))
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
