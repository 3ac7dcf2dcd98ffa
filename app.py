from __future__ import annotations
import os
from datetime import datetime
from typing import List

import streamlit as st

from line_core.clock import countdowns
from line_core.config import GameConfig, configure_logging, dump_config, load_config
from line_core.constants import CATEGORIES, CATEGORY_LABELS, RATIO_POLICIES, POLICY_ABBA
from line_core.csv_io import (
    build_template_csv, export_played_lines_csv, parse_roster_csv, roster_to_dataframe,
)
from line_core.export_pdf import played_lines_rows, render_lines_pdf
from line_core.fairness import fairness_dashboard_df
from line_core.game import LineCaller, category_breakdown
from line_core.models import Player
from line_core.patterns import pattern_label
from line_core.ui_helpers import category_heading, display_name

# -----------------------------
# Page config
# -----------------------------
st.set_page_config(layout="wide", page_title="Line Caller")
configure_logging(os.environ.get("LINE_CALLER_LOG_LEVEL", "INFO"))

# -----------------------------
# Session state init
# -----------------------------
def _ensure_state():
    ss = st.session_state
    if "caller" not in ss:
        ss["caller"] = LineCaller(load_config(os.environ.get("LINE_CALLER_CONFIG")))
    ss.setdefault("flash", None)

_ensure_state()

def _caller() -> LineCaller:
    return st.session_state["caller"]

def _flash(result):
    if not result.ok:
        st.session_state["flash"] = result.message

# --- compatibility rerun helper (Streamlit >=1.31 uses st.rerun) ---
def _safe_rerun():
    """Rerun compatible with both new and older Streamlit versions."""
    if hasattr(st, "rerun"):
        st.rerun()
    else:  # fallback for older releases
        st.experimental_rerun()

# -----------------------------
# Scoreboard
# -----------------------------
def _team_column(team: int):
    lc = _caller()
    st.markdown(f"### {lc.team_name(team)}")
    c1, c2, c3 = st.columns([1, 1, 1])
    with c1:
        if st.button("−", key=f"minus_{team}"):
            lc.unscore(team)
            _safe_rerun()
    with c2:
        st.markdown(f"## {lc.scores[team]}")
    with c3:
        if st.button("+", key=f"plus_{team}"):
            lc.score(team)
            _safe_rerun()

def scoreboard():
    lc = _caller()
    left, mid, right = st.columns([2, 1, 2])
    with left:
        _team_column(1)
    with mid:
        st.metric("Diff", lc.score_diff_text)
        st.caption(f"Point {lc.point_number}")
        clocks = countdowns(lc.config, datetime.now())
        st.caption(f"Start {lc.config.game_start_time} · Half {clocks['halftime']} · End {clocks['end']}")
        if st.button("Undo point", key="btn_undo"):
            _flash(lc.undo())
            _safe_rerun()
    with right:
        _team_column(2)

def _render_line(title: str, line: List[Player]):
    counts = category_breakdown(line)
    st.markdown(f"#### {title}")
    st.caption(" / ".join(f"{counts[c]} {CATEGORY_LABELS[c]}" for c in CATEGORIES))
    for cat in CATEGORIES:
        st.write(", ".join(display_name(p) for p in line if p.category == cat) or "—")

def lines_section():
    lc = _caller()
    policy = lc.engine.policy
    cur, nxt = st.columns([1, 1])
    with cur:
        tag = f" ({pattern_label(lc.line_index, policy)})" if policy == POLICY_ABBA else ""
        _render_line(f"Current line{tag}", lc.current_line())
    with nxt:
        tag = f" ({pattern_label(lc.line_index + 1, policy)})" if policy == POLICY_ABBA else ""
        _render_line(f"Next line{tag}", lc.next_line())

# -----------------------------
# Roster editor
# -----------------------------
def _rename(pid: str):
    # widget callback: runs before the rerun, so the field can be restored on rejection
    key = f"name_{pid}"
    result = _caller().rename_player(pid, st.session_state[key])
    _flash(result)
    if not result.ok:
        st.session_state[key] = _caller().roster.get(pid).name

def roster_section():
    lc = _caller()
    with st.expander("Roster", expanded=False):
        c1, c2, c3 = st.columns([3, 1, 1])
        with c1:
            new_name = st.text_input("Name", key="new_player_name")
        with c2:
            new_cat = st.selectbox("Category", CATEGORIES, format_func=CATEGORY_LABELS.get, key="new_player_cat")
        with c3:
            if st.button("Add", key="btn_add_player"):
                _flash(lc.add_player(new_name, new_cat))
                _safe_rerun()

        cols = st.columns(len(CATEGORIES))
        for col, cat in zip(cols, CATEGORIES):
            with col:
                players = lc.roster.players_by_category(cat)
                st.markdown(f"**{category_heading(cat, len(players))}**")
                for p in players:
                    r0, r1, r2, r3, r4 = st.columns([1, 4, 1, 1, 1])
                    r0.write(f"#{p.number}")
                    r1.text_input(
                        "Name", value=p.name, key=f"name_{p.id}", label_visibility="collapsed",
                        on_change=_rename, args=(p.id,),
                    )
                    if r2.button("↑", key=f"up_{p.id}"):
                        _flash(lc.move_player(p.id, -1))
                        _safe_rerun()
                    if r3.button("↓", key=f"down_{p.id}"):
                        _flash(lc.move_player(p.id, 1))
                        _safe_rerun()
                    if r4.button("✕", key=f"del_{p.id}"):
                        _flash(lc.remove_player(p.id))
                        _safe_rerun()

# -----------------------------
# Settings & exports
# -----------------------------
def settings_section():
    lc = _caller()
    with st.expander("Settings", expanded=False):
        policy = st.radio("Ratio", RATIO_POLICIES, index=RATIO_POLICIES.index(lc.engine.policy), horizontal=True)
        if policy != lc.engine.policy:
            lc.set_ratio_policy(policy)
            _safe_rerun()
        t2 = st.text_input("Opponent", value=lc.config.team2_name, key="team2_name")
        if t2 != lc.config.team2_name:
            _flash(lc.set_team_name(2, t2))
        start = st.text_input("Game start (HH:MM)", value=lc.config.game_start_time)
        half = st.text_input("Halftime (HH:MM)", value=lc.config.halftime_time)
        end = st.text_input("End (HH:MM)", value=lc.config.end_time)
        times = {"game_start_time": start, "halftime_time": half, "end_time": end}
        if any(getattr(lc.config, k) != v for k, v in times.items()):
            try:
                lc.config = GameConfig.model_validate({**lc.config.model_dump(), **times})
            except ValueError as e:
                st.error(str(e))

        up = st.file_uploader("Seed roster CSV", type=["csv"], key="uploader_roster")
        if up is not None and st.button("Use as seed & reset", key="btn_seed"):
            try:
                seed = parse_roster_csv(up)
            except ValueError as e:
                st.error(str(e))
            else:
                cfg = lc.config.model_copy(update={"seed_roster": seed})
                st.session_state["caller"] = LineCaller(cfg)
                _safe_rerun()
        st.download_button("Roster CSV template", data=build_template_csv(), file_name="roster_template.csv")
        st.download_button("Settings YAML", data=dump_config(lc.config), file_name="line_caller.yaml")

        if st.button("Reset game", key="btn_reset", type="primary"):
            lc.reset()
            _safe_rerun()

def reports_section():
    lc = _caller()
    with st.expander("Playing time", expanded=False):
        entries = lc.history.entries
        players = lc.roster.all_players()
        st.dataframe(fairness_dashboard_df(entries, players), use_container_width=True)
        st.dataframe(roster_to_dataframe(players), use_container_width=True)
        names = {1: lc.team_name(1), 2: lc.team_name(2)}
        st.download_button(
            "Played lines CSV",
            data=export_played_lines_csv(entries, players, names),
            file_name="played_lines.csv",
        )
        st.download_button(
            "Played lines PDF",
            data=render_lines_pdf(f"{names[1]} vs {names[2]}", played_lines_rows(entries, players, names)),
            file_name="played_lines.pdf",
            mime="application/pdf",
        )

# -----------------------------
# Page
# -----------------------------
flash = st.session_state.pop("flash", None)
if flash:
    st.warning(flash)

scoreboard()
st.divider()
lines_section()
st.divider()
roster_section()
settings_section()
reports_section()
