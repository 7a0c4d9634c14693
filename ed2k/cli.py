from __future__ import annotations

import os
import sys
import argparse
import json as _json
import concurrent.futures as _fut

from typing import Any, Dict, List

from ed2k.constants import DEFAULT_VARIANT, DIGEST_SIZE, Variant
from ed2k.errors import Ed2kError
from ed2k.fileutil import ed2k_link, hash_file, hash_path
from ed2k.hasher import parse_variant


STDIN_PATH = "-"


def _hash_one(path: str, variant: Variant) -> Dict[str, Any]:
    """Hash a single input and describe the outcome as a result dict."""

    res: Dict[str, Any] = {"path": path, "status": "unknown", "variant": variant.value}
    if path != STDIN_PATH and os.path.isdir(path):
        res["status"] = "skipped"
        res["message"] = "is a directory"
        return res
    try:
        if path == STDIN_PATH:
            size, digest = hash_file(sys.stdin.buffer, variant)
        else:
            size, digest = hash_path(path, variant)
    except OSError as exc:
        res["status"] = "fail"
        res["message"] = exc.strerror or str(exc)
        return res
    res["status"] = "ok"
    res["size"] = size
    res["hash"] = digest.hex()
    if variant is Variant.REDBLUE:
        res["red"] = digest[:DIGEST_SIZE].hex()
        res["blue"] = digest[DIGEST_SIZE:].hex()
    return res


def _links_for(res: Dict[str, Any]) -> List[str]:
    if res["path"] == STDIN_PATH:
        raise ValueError("cannot build an ed2k link for standard input")
    size = res["size"]
    if "blue" not in res:
        return [ed2k_link(res["path"], size, bytes.fromhex(res["hash"]))]
    links = [ed2k_link(res["path"], size, bytes.fromhex(res["blue"]))]
    if res["red"] != res["blue"]:
        links.append(ed2k_link(res["path"], size, bytes.fromhex(res["red"])))
    return links


def cmd_hash(
    paths: List[str],
    *,
    variant: Variant = DEFAULT_VARIANT,
    link: bool = False,
    as_json: bool = False,
    jobs: int = 1,
    quiet: bool = False,
) -> bool:
    """Hash files and print one line (or link) per file.

    Args:
        paths: Files to hash; "-" reads standard input.
        variant: ED2K flavor to compute.
        link: Print ed2k:// links instead of "<hash>  <path>" lines. With
            REDBLUE the Blue link is printed, followed by the Red link when
            the two differ.
        as_json: When True, print a JSON result summary.
        jobs: Maximum parallel workers. Every file gets its own session.
        quiet: Suppress warnings about skipped inputs.

    Returns:
        True when every input was hashed (skipped directories do not count
        as failures), False otherwise.

    Raises:
        RuntimeError: If no inputs were given.
    """
    if not paths:
        raise RuntimeError("No input files")
    if paths.count(STDIN_PATH) > 1:
        raise RuntimeError("Standard input can only be hashed once")

    results: List[Dict[str, Any]] = []
    with _fut.ThreadPoolExecutor(max_workers=max(1, int(jobs))) as ex:
        for r in ex.map(lambda p: _hash_one(p, variant), paths):
            results.append(r)

    if link:
        for r in results:
            if r["status"] != "ok":
                continue
            try:
                r["links"] = _links_for(r)
            except ValueError as exc:
                r["status"] = "fail"
                r["message"] = str(exc)

    ok = sum(1 for r in results if r["status"] == "ok")
    skipped = sum(1 for r in results if r["status"] == "skipped")
    failed = sum(1 for r in results if r["status"] == "fail")
    if as_json:
        print(_json.dumps({"results": results, "ok": ok, "skipped": skipped, "failed": failed}))
        return failed == 0

    for r in results:
        status = r["status"]
        if status == "ok":
            if link:
                for line in r["links"]:
                    print(line)
            else:
                print(f"{r['hash']}  {r['path']}")
        elif status == "skipped":
            if not quiet:
                print(f"Warning: {r['path']}: {r['message']}, skipped", file=sys.stderr)
        else:
            print(f"Error: {r['path']}: {r.get('message', 'failed')}", file=sys.stderr)
    return failed == 0


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="ed2k",
        description="Compute ED2K (eDonkey2000) file hashes",
        epilog=(
            "red and blue only differ for files whose size is a positive multiple of "
            "9728000 bytes; redblue prints both (red first) from a single read."
        ),
    )
    ap.add_argument("paths", nargs="+", help="Files to hash ('-' for standard input)")
    ap.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=DEFAULT_VARIANT.value,
        help="Hash flavor (default: blue)",
    )
    ap.add_argument("--link", action="store_true", help="Print ed2k:// file links")
    ap.add_argument("--json", action="store_true", help="Emit JSON result summary")
    ap.add_argument("--jobs", "-j", type=int, default=1, help="Parallel jobs (default 1)")
    ap.add_argument("--quiet", help="suppress warnings about skipped inputs", action="store_true")

    args = ap.parse_args(argv)
    try:
        success = cmd_hash(
            args.paths,
            variant=parse_variant(args.variant),
            link=args.link,
            as_json=args.json,
            jobs=args.jobs,
            quiet=args.quiet,
        )
        sys.exit(0 if success else 1)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (Ed2kError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
