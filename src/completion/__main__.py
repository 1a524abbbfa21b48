from __future__ import annotations
import argparse, json, logging, os, sys
from dataclasses import asdict

from .config import CompletionOptions, MAX_CANDIDATES, VERBOSE_ENV
from .engine import AutocompleteController
from .models import Key, NavigationState
from .popup import build_rows

_REPL_KEYS = {
    ":up": Key.ARROW_UP,
    ":down": Key.ARROW_DOWN,
    ":tab": Key.TAB,
    ":enter": Key.ENTER,
    ":esc": Key.ESCAPE,
}


def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def _print_table(ctl: AutocompleteController, state: NavigationState) -> None:
    word, _ = ctl.word_under_cursor()
    if not state.is_open:
        print(_c(f"(no suggestions for {word!r})", "2;37")); return
    a = state.anchor
    print(_c(f"word {word!r}  anchor ({a.x:g}, {a.y:g})", "2;37"))
    print(_c("   #  Kind      Text                 Description", "1;37"))
    for r in build_rows(state.candidates, state.selected_index):
        mark = ">" if r.selected else " "
        print(f"{mark} {r.index + 1:<2} {r.glyph} {r.label:<8} {r.text:<20} {r.description or ''}")

def _as_json(ctl: AutocompleteController, state: NavigationState) -> str:
    word, start = ctl.word_under_cursor()
    return json.dumps({
        "word": word,
        "start": start,
        "cursor": ctl.cursor,
        "identifiers": list(ctl.identifiers),
        "open": state.is_open,
        "selected_index": state.selected_index,
        "anchor": asdict(state.anchor),
        "candidates": [asdict(c) for c in state.candidates],
    }, ensure_ascii=False, indent=2)

def _repl(ctl: AutocompleteController) -> None:
    print("Type text and press Enter to append it (empty line to quit).")
    print(_c("Commands: :up :down :tab :enter :esc, :show, :reset", "2;37"))
    while True:
        try:
            raw = input("> ")
        except EOFError:
            print(); break
        cmd = raw.strip().lower()
        if raw == "":
            print("Goodbye!"); break
        if cmd in _REPL_KEYS:
            res = ctl.on_key(_REPL_KEYS[cmd])
            if not res.consumed:
                print(_c("(popup closed, key ignored)", "2;36")); continue
            if res.accepted is not None:
                print(_c(f"(accepted {res.accepted!r})", "2;36"))
                print(ctl.document); continue
            _print_table(ctl, res.state); continue
        if cmd == ":show":
            print(ctl.document); continue
        if cmd == ":reset":
            ctl.on_document_changed("", 0); print(_c("(reset)", "2;36")); continue

        text = ctl.document + raw
        _print_table(ctl, ctl.on_document_changed(text, len(text)))

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Lua autocomplete (candidates + popup anchor)")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--text", default=None, help="Document text")
    src.add_argument("--file", default=None, help="Read the document from a file")
    p.add_argument("--offset", type=int, default=None, help="Caret offset (default: end of document)")
    p.add_argument("--max-candidates", type=int, default=MAX_CANDIDATES)
    p.add_argument("--json", action="store_true", help="Emit one JSON object")
    p.add_argument("--repl", action="store_true", help="Interactive typing session")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if args.verbose or os.environ.get(VERBOSE_ENV) == "1":
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        options = CompletionOptions(max_candidates=args.max_candidates)
    except ValueError as exc:
        p.error(str(exc))

    ctl = AutocompleteController(options=options)
    if args.file is not None:
        try:
            with open(args.file, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            p.error(f"cannot read {args.file}: {exc}")
    else:
        text = args.text or ""

    state = ctl.on_document_changed(text, args.offset)
    if args.repl:
        _repl(ctl)
        return 0
    if args.json:
        print(_as_json(ctl, state))
    else:
        _print_table(ctl, state)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
