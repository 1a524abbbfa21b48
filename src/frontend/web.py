from __future__ import annotations
import argparse
import logging
import os
from dataclasses import asdict
from typing import Any, Dict

from flask import Flask, Response, abort, jsonify, request

from completion.catalog import KEYWORD_CATALOG
from completion.config import CompletionOptions, DEFAULT_OPTIONS, VERBOSE_ENV
from completion.engine import AutocompleteController
from completion.identifiers import extract_identifiers
from completion.models import Key, KeyResult, NavigationState, Point
from completion.popup import build_rows
from completion.search import match

log = logging.getLogger(__name__)

app = Flask(__name__)
_options: CompletionOptions = DEFAULT_OPTIONS
_sessions: Dict[str, AutocompleteController] = {}
MAX_TABS = 64  # oldest tab session is dropped past this


class BadRequest(Exception):
    pass


@app.errorhandler(BadRequest)
def _bad_request(exc: BadRequest):
    return jsonify({"error": str(exc)}), 400


# ---------- helpers ----------

def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("expected a JSON object body")
    return data

def _int_field(data: Dict[str, Any], name: str, default: int | None = None) -> int | None:
    value = data.get(name, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"{name!r} must be an integer")
    return value

def _session(tab: str, *, create: bool = False) -> AutocompleteController:
    ctl = _sessions.get(tab)
    if ctl is None:
        if not create:
            abort(404)
        if len(_sessions) >= MAX_TABS:
            stale = next(iter(_sessions))
            del _sessions[stale]
            log.info("tab %s evicted", stale)
        ctl = AutocompleteController(options=_options)
        _sessions[tab] = ctl
        log.info("tab %s opened (%d open)", tab, len(_sessions))
    return ctl

def _state_json(state: NavigationState) -> Dict[str, Any]:
    rows = build_rows(state.candidates, state.selected_index) if state.is_open else []
    return {
        "open": state.is_open,
        "selected_index": state.selected_index,
        "anchor": asdict(state.anchor),
        "rows": [asdict(r) for r in rows],
    }

def _result_json(res: KeyResult) -> Dict[str, Any]:
    return {
        "consumed": res.consumed,
        "accepted": res.accepted,
        "edit": asdict(res.edit) if res.edit else None,
        "state": _state_json(res.state),
    }

# ---------- API ----------
@app.get("/health")
def health():
    return jsonify({"ok": True, "tabs": len(_sessions)})

@app.get("/api/catalog")
def api_catalog():
    return jsonify([asdict(e) for e in KEYWORD_CATALOG])

@app.get("/api/complete")
def api_complete():
    q = request.args.get("q", "", type=str)
    text = request.args.get("text", "", type=str)
    rows = match(q, extract_identifiers(text), options=_options)
    return jsonify([asdict(c) for c in rows])

@app.post("/api/tabs/<tab>/document")
def api_document(tab: str):
    data = _body()
    text = data.get("text")
    if not isinstance(text, str):
        raise BadRequest("'text' must be a string")
    cursor = _int_field(data, "cursor")
    ctl = _session(tab, create=True)
    origin = data.get("origin")
    if origin is not None:
        try:
            ctl.surface_origin = Point(float(origin["x"]), float(origin["y"]))
        except (KeyError, TypeError, ValueError):
            raise BadRequest("'origin' must be {x, y}")
    state = ctl.on_document_changed(text, cursor)
    return jsonify({"state": _state_json(state), "identifiers": list(ctl.identifiers)})

@app.post("/api/tabs/<tab>/cursor")
def api_cursor(tab: str):
    data = _body()
    cursor = _int_field(data, "cursor")
    if cursor is None:
        raise BadRequest("'cursor' is required")
    state = _session(tab).on_cursor_moved(cursor)
    return jsonify({"state": _state_json(state)})

@app.post("/api/tabs/<tab>/key")
def api_key(tab: str):
    data = _body()
    res = _session(tab).on_key(Key.parse(data.get("key")))
    return jsonify(_result_json(res))

@app.post("/api/tabs/<tab>/pointer")
def api_pointer(tab: str):
    data = _body()
    ctl = _session(tab)
    if data.get("outside"):
        return jsonify({"consumed": False, "accepted": None, "edit": None,
                        "state": _state_json(ctl.on_pointer_outside())})
    index = _int_field(data, "index")
    if index is None:
        raise BadRequest("expected 'outside' or 'index'")
    return jsonify(_result_json(ctl.on_pointer_select(index)))

@app.delete("/api/tabs/<tab>")
def api_close_tab(tab: str):
    if _sessions.pop(tab, None) is None:
        abort(404)
    log.info("tab %s closed (%d open)", tab, len(_sessions))
    return jsonify({"ok": True})

# ---------- UI ----------
@app.get("/")
def home():
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Lua Editor • Autocomplete</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --border:#1c2530;
  --fn:#60a5fa;
  --var:#4ade80;
  --hover:#16202b;
}
*{box-sizing:border-box}
html,body{height:100%}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:1100px; margin:24px auto; padding:0 16px; }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; overflow:hidden; box-shadow:0 10px 30px rgba(0,0,0,.25);
  display:flex; flex-direction:column; height:calc(100vh - 48px);
}
.title{ padding:12px 16px; border-bottom:1px solid var(--border); font-size:14px; letter-spacing:.3px }
.tabs{ display:flex; align-items:center; border-bottom:1px solid var(--border) }
.tab{ padding:8px 14px; font-size:14px; color:var(--muted); cursor:pointer; display:flex; gap:8px }
.tab.active{ color:var(--ink); border-top:2px solid var(--accent); background:var(--bg) }
.tab .x{ color:var(--muted) } .tab .x:hover{ color:var(--ink) }
.btn{ padding:4px 10px; margin:0 8px; border-radius:8px; border:1px solid var(--border);
  background:transparent; color:var(--muted); cursor:pointer }
textarea{
  flex:1; resize:none; outline:none; border:none; background:var(--bg); color:var(--ink);
  padding:24px; font:14px/1.625 ui-monospace,SFMono-Regular,Menlo,Monaco,Consolas,monospace;
}
.status{ padding:6px 16px; border-top:1px solid var(--border); color:var(--muted); font-size:12px }
.popup{
  position:fixed; z-index:50; display:none; min-width:200px; max-width:300px;
  background:var(--panel); border:1px solid var(--border); border-radius:8px;
  box-shadow:0 10px 30px rgba(0,0,0,.45); padding:4px 0; max-height:12rem; overflow-y:auto;
}
.row{ display:flex; align-items:center; gap:8px; padding:6px 12px; cursor:pointer; color:var(--muted) }
.row:hover{ background:var(--hover); color:var(--ink) }
.row.sel{ background:var(--hover); color:var(--ink) }
.glyph{ width:1rem; text-align:center; font-size:12px; font-weight:700 }
.glyph.function{ color:var(--fn) } .glyph.keyword{ color:var(--accent) } .glyph.variable{ color:var(--var) }
.text{ flex:1; font:14px ui-monospace,Menlo,Consolas,monospace }
.desc{ font-size:12px; color:var(--muted) }
.label{ font-size:12px; color:var(--muted); text-transform:capitalize }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <div class="title">Lua Editor</div>
      <div class="tabs"><div id="tabs" style="display:flex"></div><button id="add" class="btn">+</button></div>
      <textarea id="ed" spellcheck="false" placeholder="Start coding..."></textarea>
      <div class="status" id="status">Lines: 1</div>
    </div>
  </div>
  <div id="popup" class="popup"></div>

<script>
const $ = (sel) => document.querySelector(sel);
const ed = $("#ed"), popup = $("#popup"), tabsEl = $("#tabs"), status = $("#status");
const POPUP_KEYS = new Set(["ArrowUp","ArrowDown","Enter","Tab","Escape"]);
let tabs = [], active = null, isOpen = false, seq = 0;

async function post(path, body){
  const resp = await fetch(path, {method:"POST", headers:{"Content-Type":"application/json"}, body:JSON.stringify(body)});
  if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
  return resp.json();
}
function tabUrl(id, what){ return `/api/tabs/${encodeURIComponent(id)}/${what}`; }
function origin(){
  const r = ed.getBoundingClientRect();
  return {x: r.left, y: r.top - ed.scrollTop};
}
function escapeHtml(s){ return String(s ?? "").replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }

function render(state){
  isOpen = !!state.open && state.rows.length > 0;
  if(!isOpen){ popup.style.display = "none"; popup.innerHTML = ""; return; }
  popup.style.left = `${state.anchor.x}px`;
  popup.style.top = `${state.anchor.y}px`;
  popup.innerHTML = state.rows.map(r => `
    <div class="row${r.selected ? " sel" : ""}" data-index="${r.index}">
      <span class="glyph ${r.label}">${escapeHtml(r.glyph)}</span>
      <div class="text">${escapeHtml(r.text)}${r.description ? `<div class="desc">${escapeHtml(r.description)}</div>` : ""}</div>
      <span class="label">${r.label}</span>
    </div>`).join("");
  popup.style.display = "block";
}
// the server counts code points, the textarea counts UTF-16 units
function caret(){ return [...ed.value.slice(0, ed.selectionStart)].length; }
function unitsFor(text, points){
  let units = 0;
  for(const ch of text){ if(points-- <= 0) break; units += ch.length; }
  return units;
}
function applyEdit(edit){
  if(!edit) return;
  ed.value = edit.text;
  const at = unitsFor(edit.text, edit.cursor);
  ed.setSelectionRange(at, at);
  saveActive();
}
function saveActive(){
  const t = tabs.find(t => t.id === active);
  if(t) t.content = ed.value;
  status.textContent = `Lines: ${ed.value.split("\n").length}`;
}

async function documentChanged(){
  saveActive();
  const mine = ++seq;
  const data = await post(tabUrl(active, "document"), {text: ed.value, cursor: caret(), origin: origin()});
  if(mine === seq) render(data.state);
}
async function cursorMoved(){
  if(!isOpen) return;
  const data = await post(tabUrl(active, "cursor"), {cursor: caret()});
  render(data.state);
}

ed.addEventListener("input", documentChanged);
ed.addEventListener("click", cursorMoved);
ed.addEventListener("keyup", (ev) => { if(ev.key === "ArrowLeft" || ev.key === "ArrowRight" || ev.key === "Home" || ev.key === "End") cursorMoved(); });
ed.addEventListener("keydown", async (ev) => {
  if(!isOpen || !POPUP_KEYS.has(ev.key)) return;
  ev.preventDefault();
  const data = await post(tabUrl(active, "key"), {key: ev.key});
  applyEdit(data.edit);
  render(data.state);
});
popup.addEventListener("mousedown", async (ev) => {
  ev.preventDefault();
  const row = ev.target.closest(".row");
  if(!row) return;
  const data = await post(tabUrl(active, "pointer"), {index: parseInt(row.dataset.index, 10)});
  applyEdit(data.edit);
  render(data.state);
  ed.focus();
});
document.addEventListener("mousedown", async (ev) => {
  if(!isOpen || popup.contains(ev.target)) return;
  const data = await post(tabUrl(active, "pointer"), {outside: true});
  render(data.state);
});

function drawTabs(){
  tabsEl.innerHTML = tabs.map(t => `
    <div class="tab${t.id === active ? " active" : ""}" data-id="${t.id}">${escapeHtml(t.name)}
      ${tabs.length > 1 ? `<span class="x" data-close="${t.id}">×</span>` : ""}</div>`).join("");
}
function switchTo(id){
  active = id;
  const t = tabs.find(t => t.id === id);
  ed.value = t ? t.content : "";
  render({open:false, rows:[]});
  drawTabs(); saveActive(); ed.focus();
}
function addTab(){
  const id = Date.now().toString(36);
  tabs.push({id, name:`Untitled ${tabs.length + 1}`, content:""});
  switchTo(id);
}
async function closeTab(id){
  if(tabs.length <= 1) return;
  tabs = tabs.filter(t => t.id !== id);
  fetch(`/api/tabs/${encodeURIComponent(id)}`, {method:"DELETE"});
  if(active === id) switchTo(tabs[0].id); else drawTabs();
}
tabsEl.addEventListener("click", (ev) => {
  const close = ev.target.dataset.close;
  if(close){ ev.stopPropagation(); closeTab(close); return; }
  const tab = ev.target.closest(".tab");
  if(tab) switchTo(tab.dataset.id);
});
$("#add").addEventListener("click", addTab);
window.addEventListener("pagehide", () => {
  for(const t of tabs) fetch(`/api/tabs/${encodeURIComponent(t.id)}`, {method:"DELETE", keepalive:true});
});
addTab();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Lua editor web UI")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--max-candidates", type=int, default=DEFAULT_OPTIONS.max_candidates)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose or os.environ.get(VERBOSE_ENV) == "1":
        logging.basicConfig(level=logging.INFO)

    global _options
    try:
        _options = CompletionOptions(max_candidates=args.max_candidates)
    except ValueError as exc:
        ap.error(str(exc))

    log.info("serving on http://%s:%d", args.host, args.port)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _sessions.clear()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
