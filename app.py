"""Ad Insight: Local Web UI

A Streamlit dashboard over the ad_insight package.

Views:
  📝 Input      - Paste a report and analyze it
  📊 Dashboard  - Stats, keyword weights, formats, themes, audience mix
  🎬 Generator  - Script concepts for a topic, expandable into full scripts
"""

from __future__ import annotations

import asyncio

import streamlit as st

from ad_insight.analyzer import ReportAnalyzer
from ad_insight.errors import AdInsightError
from ad_insight.generator import generate_concepts
from ad_insight.generator.script_writer import ScriptWriter
from ad_insight.models import ParsedData, ScriptLanguage
from ad_insight.utils.config import load_config
from ad_insight.utils.logging import setup_logging

REPORT_PLACEHOLDER = """Paste your report here...

Duration: Sept 15 to Nov 26

Winning Ads:
VS 20
VS 29 (HF)
IG Reels - Can Reiki Really Cure Illness?
IG Reel - One Should Learn Reiki in a Family (HF)

Underperforming Ads:
VS 44 - Money Attraction
IG Reel - Lottery through Reiki"""

# ── Page config ────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Ad Insight",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
  .main .block-container { padding-top: 1.5rem; max-width: 1100px; }
  .stButton > button {
    background: #8b5cf6 !important;
    color: white !important;
    border: none !important;
    font-weight: 700 !important;
    border-radius: 8px !important;
  }
  .stButton > button:hover { background: #7c3aed !important; }
  .section-header {
    font-size: 22px;
    font-weight: 800;
    color: #8b5cf6;
    border-bottom: 3px solid #8b5cf6;
    padding-bottom: 6px;
    margin-bottom: 16px;
  }
</style>
""", unsafe_allow_html=True)


# ── Session state init ─────────────────────────────────────────────────────────
def _init_state():
    defaults = {
        "view": "input",
        "raw_text": "",
        "parsed": None,
        "topic": "",
        "concepts": [],
        "expanded_index": None,
        "full_script": "",
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


@st.cache_resource
def _config() -> dict:
    config = load_config()
    setup_logging(config.get("logging", {}).get("level", "INFO"))
    return config


_init_state()


# ── Sidebar Navigation ─────────────────────────────────────────────────────────
def sidebar():
    with st.sidebar:
        st.markdown("## 📊 Ad Insight")
        st.markdown("---")

        views = {
            "📝 Input": "input",
            "📊 Dashboard": "dashboard",
            "🎬 Generator": "generator",
        }
        has_data = st.session_state.parsed is not None
        for label, key in views.items():
            disabled = key != "input" and not has_data
            if st.button(label, key=f"nav_{key}", use_container_width=True, disabled=disabled):
                st.session_state.view = key
                st.rerun()

        if has_data:
            st.markdown("---")
            stats = st.session_state.parsed.stats
            st.metric("Win Rate", f"{stats.win_rate}%")
            st.caption(stats.date_range)


# ── Views ──────────────────────────────────────────────────────────────────────
def view_input():
    st.markdown('<div class="section-header">Report Text</div>', unsafe_allow_html=True)
    raw_text = st.text_area(
        "Report text",
        value=st.session_state.raw_text,
        placeholder=REPORT_PLACEHOLDER,
        height=360,
        label_visibility="collapsed",
    )

    if st.button("Analyze Report"):
        st.session_state.raw_text = raw_text
        try:
            parsed = ReportAnalyzer().analyze(raw_text)
        except AdInsightError as e:
            st.warning(str(e))
            return
        st.session_state.parsed = parsed
        st.session_state.concepts = []
        st.session_state.full_script = ""
        st.session_state.view = "dashboard"
        st.rerun()


def view_dashboard(parsed: ParsedData):
    s = parsed.stats
    st.markdown('<div class="section-header">Performance Overview</div>', unsafe_allow_html=True)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Winning Ads", s.total_winning)
    c2.metric("Underperforming", s.total_losing)
    c3.metric("Win Rate", f"{s.win_rate}%")
    c4.metric("Date Range", s.date_range)

    left, right = st.columns(2)
    with left:
        st.subheader("Winning Formats")
        if parsed.formats:
            st.bar_chart(
                {"Format": [f.name for f in parsed.formats], "Count": [f.count for f in parsed.formats]},
                x="Format",
                y="Count",
                color="#8b5cf6",
            )
        else:
            st.caption("No formats detected.")

        st.subheader("Audience Mix")
        st.caption("Placeholder distribution, not read from the report.")
        st.bar_chart(
            {"Audience": [a.name for a in parsed.audiences], "Share": [a.count for a in parsed.audiences]},
            x="Audience",
            y="Share",
            color="#06b6d4",
        )

    with right:
        st.subheader("Theme Scores")
        if parsed.themes:
            st.bar_chart(
                {"Theme": [t.name for t in parsed.themes], "Score": [t.count for t in parsed.themes]},
                x="Theme",
                y="Score",
                color="#10b981",
            )
        else:
            st.caption("No themes detected.")

        st.subheader("Top Keywords")
        if parsed.keywords:
            cloud = " ".join(
                f'<span style="font-size:{k.normalized_count:.2f}em;margin-right:12px;'
                f'color:#8b5cf6;font-weight:700">{k.word}</span>'
                for k in parsed.keywords
            )
            st.markdown(cloud, unsafe_allow_html=True)
        else:
            st.caption("No keywords extracted.")

    win_col, lose_col = st.columns(2)
    with win_col:
        st.subheader("✅ Winning Ads")
        for ad in parsed.winning_ads:
            st.text(ad)
    with lose_col:
        st.subheader("⚠️ Underperforming Ads")
        for ad in parsed.losing_ads:
            st.text(ad)


def view_generator(parsed: ParsedData):
    st.markdown('<div class="section-header">Script Generator</div>', unsafe_allow_html=True)
    topic = st.text_input("Topic", value=st.session_state.topic, placeholder="e.g. Reiki Healing")

    if st.button("Generate Scripts"):
        st.session_state.topic = topic
        try:
            st.session_state.concepts = generate_concepts(parsed, topic)
        except AdInsightError as e:
            st.warning(str(e))
            return
        st.session_state.expanded_index = None
        st.session_state.full_script = ""

    if not st.session_state.concepts:
        return

    languages = list(ScriptLanguage)
    default_language = ScriptLanguage(_config()["generator"].get("default_language", "English"))
    language = st.radio(
        "Script language",
        options=languages,
        index=languages.index(default_language),
        format_func=lambda lang: lang.value,
        horizontal=True,
    )

    for i, concept in enumerate(st.session_state.concepts):
        with st.container(border=True):
            st.markdown(f"**{concept.title}** · `{concept.format}`")
            st.markdown(f"_{concept.hook}_")
            st.text(concept.script)
            if st.button("Expand to Full Production Script", key=f"expand_{i}"):
                writer = ScriptWriter(_config())
                with st.spinner("Writing the full script..."):
                    result = asyncio.run(
                        writer.expand(concept, parsed, st.session_state.topic, language)
                    )
                st.session_state.expanded_index = i
                st.session_state.full_script = result.text

            if st.session_state.expanded_index == i and st.session_state.full_script:
                st.code(st.session_state.full_script, language=None)
                st.download_button(
                    "Download script",
                    data=st.session_state.full_script,
                    file_name=f"script_{i + 1}.txt",
                    key=f"download_{i}",
                )


# ── Main ───────────────────────────────────────────────────────────────────────
sidebar()

parsed = st.session_state.parsed
view = st.session_state.view
if view == "dashboard" and parsed is not None:
    view_dashboard(parsed)
elif view == "generator" and parsed is not None:
    view_generator(parsed)
else:
    view_input()
