# app.py
# CustomTkinter desktop editor with inline Lua autocomplete (dark theme).
# - One tab per document, each with its own AutocompleteController.
# - Borderless toplevel as the suggestion popup, anchored under the caret.
# - Event log pane for accepted suggestions.

from __future__ import annotations
from typing import Dict, Optional, Sequence

import tkinter as tk
import customtkinter as ctk

# Project imports (ensure PYTHONPATH=src)
from completion import (
    AutocompleteController, CompletionOptions, Key, Point,
    PopupRow, SuggestionPopup, TextEdit,
)

ROW_COLORS = {"function": "#60a5fa", "keyword": "#6ee7ff", "variable": "#4ade80"}
TEXT_PADDING = 6  # CTkTextbox border spacing + inner padding


# -------------------- popup view --------------------

class PopupWindow:
    """Borderless toplevel that draws popup rows at a screen point."""

    def __init__(self, master: ctk.CTk, font_mono: ctk.CTkFont) -> None:
        self._master = master
        self._font_mono = font_mono
        self._font_small = ctk.CTkFont(size=11)
        self._on_click = lambda index: None
        self.top = ctk.CTkToplevel(master)
        self.top.overrideredirect(True)
        self.top.withdraw()
        self.frame = ctk.CTkFrame(self.top, corner_radius=8, border_width=1)
        self.frame.pack(fill="both", expand=True)
        self._visible = False

    def bind_click(self, callback) -> None:
        self._on_click = callback

    def render(self, rows: Sequence[PopupRow], anchor: Point) -> None:
        for child in self.frame.winfo_children():
            child.destroy()
        for r in rows:
            row = ctk.CTkFrame(
                self.frame, corner_radius=4,
                fg_color=("gray75", "gray25") if r.selected else "transparent",
            )
            row.pack(fill="x", padx=4, pady=1)
            glyph = ctk.CTkLabel(row, text=r.glyph, width=18, text_color=ROW_COLORS.get(r.label, "gray60"))
            glyph.pack(side="left", padx=(6, 4))
            text = ctk.CTkLabel(row, text=r.text, font=self._font_mono, anchor="w")
            text.pack(side="left")
            label = ctk.CTkLabel(row, text=r.label, font=self._font_small, text_color="gray60")
            label.pack(side="right", padx=(12, 6))
            if r.description:
                desc = ctk.CTkLabel(row, text=r.description, font=self._font_small, text_color="gray60")
                desc.pack(side="left", padx=(10, 0))
            for w in row.winfo_children() + [row]:
                w.bind("<Button-1>", lambda _ev, i=r.index: self._on_click(i))
        self.top.geometry(f"+{int(anchor.x)}+{int(anchor.y)}")
        self.top.deiconify()
        self.top.lift()
        self._visible = True

    def hide(self) -> None:
        if self._visible:
            self.top.withdraw()
            self._visible = False

    def contains(self, x_root: int, y_root: int) -> bool:
        if not self._visible:
            return False
        x, y = self.top.winfo_rootx(), self.top.winfo_rooty()
        return x <= x_root < x + self.top.winfo_width() and y <= y_root < y + self.top.winfo_height()


# -------------------- one editor tab --------------------

class EditorTab:
    """A text surface, its controller and the popup bound to both."""

    def __init__(self, app: "EditorApp", frame: ctk.CTkFrame, name: str) -> None:
        self.app = app
        self.name = name
        self.textbox = ctk.CTkTextbox(frame, wrap="none", font=app.font_mono, undo=True)
        self.textbox.pack(fill="both", expand=True)

        self.controller = AutocompleteController(options=app.options)
        self.view = PopupWindow(app, app.font_mono)
        self.popup = SuggestionPopup(self.view, on_select=self._on_select, on_close=self._on_close)
        self.view.bind_click(self.popup.click)
        self.controller.add_listener(self.popup.present)

        self.textbox.bind("<KeyPress>", self._on_key_press)
        self.textbox.bind("<KeyRelease>", self._on_key_release)
        self.textbox.bind("<ButtonRelease-1>", lambda _ev: self._sync_cursor())

    # --------- surface helpers ---------

    def text(self) -> str:
        return self.textbox.get("1.0", "end-1c")

    def cursor(self) -> int:
        return len(self.textbox.get("1.0", "insert"))

    def _origin(self) -> Point:
        return Point(self.textbox.winfo_rootx(), self.textbox.winfo_rooty())

    def _apply(self, edit: Optional[TextEdit]) -> None:
        if edit is None:
            return
        self.textbox.delete("1.0", "end")
        self.textbox.insert("1.0", edit.text)
        self.textbox.mark_set("insert", f"1.0+{edit.cursor}c")
        self.textbox.see("insert")
        self.app.log(f"Inserted {edit.inserted!r} at offset {edit.start}.")
        self.app.update_status(self)

    # --------- events ---------

    def _on_key_press(self, ev):
        if not self.controller.state.is_open:
            return None
        key = Key.parse(ev.keysym)
        if key is Key.OTHER:
            return None
        res = self.controller.on_key(key)
        if not res.consumed:
            return None
        self._apply(res.edit)
        return "break"

    def _on_key_release(self, ev) -> None:
        if ev.keysym in ("Left", "Right", "Home", "End", "Up", "Down", "Prior", "Next"):
            self._sync_cursor()
            return
        self.controller.surface_origin = self._origin()
        self.controller.on_document_changed(self.text(), self.cursor())
        self.app.update_status(self)

    def _sync_cursor(self) -> None:
        self.controller.on_cursor_moved(self.cursor())

    def _on_select(self, text: str) -> None:
        self._apply(self.controller.accept(text).edit)
        self.textbox.focus_set()

    def _on_close(self) -> None:
        self.controller.on_pointer_outside()

    def pointer_down(self, x_root: int, y_root: int) -> None:
        if not self.view.contains(x_root, y_root):
            self.popup.pointer_outside()

    def destroy(self) -> None:
        self.view.hide()
        self.view.top.destroy()


# -------------------- main app --------------------

class EditorApp(ctk.CTk):
    """Dark-themed multi-tab Lua editor with inline suggestions."""

    def __init__(self) -> None:
        super().__init__()

        # Theme
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # Window
        self.title("Lua Editor")
        self.geometry("980x700")
        self.minsize(820, 560)

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=14)

        # Grid metrics come from the real font
        self.options = CompletionOptions(
            char_width_px=self.font_mono.measure("0"),
            line_height_px=self.font_mono.metrics("linespace"),
            anchor_padding_px=TEXT_PADDING,
        )

        # State
        self._tabs: Dict[str, EditorTab] = {}
        self._counter = 0

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)  # editor
        self.grid_rowconfigure(3, weight=0)  # log

        # Build UI
        self._build_header()
        self._build_editor()
        self._build_status()
        self._build_log()

        self.bind_all("<Button-1>", self._on_pointer_down, add="+")
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.new_tab()

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        title = ctk.CTkLabel(header, text="Lua Editor", font=self.font_title)
        title.grid(row=0, column=0, sticky="w", padx=12, pady=10)

        ctk.CTkButton(header, text="New Tab", width=90, command=self.new_tab).grid(
            row=0, column=1, padx=(0, 6), pady=10
        )
        ctk.CTkButton(header, text="Close Tab", width=90, command=self.close_tab).grid(
            row=0, column=2, padx=(0, 12), pady=10
        )

    def _build_editor(self) -> None:
        self.tabview = ctk.CTkTabview(self, corner_radius=10, command=self._on_tab_switched)
        self.tabview.grid(row=1, column=0, sticky="nsew", padx=12, pady=6)

    def _build_status(self) -> None:
        self.lbl_status = ctk.CTkLabel(self, text="Lines: 1", anchor="w", font=self.font_label)
        self.lbl_status.grid(row=2, column=0, sticky="ew", padx=24)

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_log = ctk.CTkTextbox(frame, height=110, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.log("Editor ready. Start typing Lua; Tab or Enter accepts a suggestion.")

    # --------- tabs ---------

    def new_tab(self) -> None:
        self._counter += 1
        name = f"Untitled {self._counter}"
        frame = self.tabview.add(name)
        self._tabs[name] = EditorTab(self, frame, name)
        self.tabview.set(name)
        self._tabs[name].textbox.focus_set()
        self.log(f"Opened {name}.")

    def close_tab(self) -> None:
        if len(self._tabs) <= 1:
            return
        name = self.tabview.get()
        tab = self._tabs.pop(name, None)
        if tab is None:
            return
        tab.destroy()
        self.tabview.delete(name)
        self.log(f"Closed {name}.")
        self._on_tab_switched()

    def current(self) -> Optional[EditorTab]:
        return self._tabs.get(self.tabview.get())

    def _on_tab_switched(self) -> None:
        for tab in self._tabs.values():
            if tab.controller.state.is_open:
                tab.controller.on_pointer_outside()
        cur = self.current()
        if cur is not None:
            self.update_status(cur)

    # --------- pointer ---------

    def _on_pointer_down(self, ev: tk.Event) -> None:
        cur = self.current()
        if cur is not None:
            cur.pointer_down(ev.x_root, ev.y_root)

    # --------- misc UI helpers ---------

    def update_status(self, tab: EditorTab) -> None:
        if tab is self.current():
            lines = tab.text().count("\n") + 1
            self.lbl_status.configure(text=f"Lines: {lines}")

    def log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        for tab in self._tabs.values():
            tab.destroy()
        self._tabs.clear()
        self.destroy()


if __name__ == "__main__":
    app = EditorApp()
    app.mainloop()
