"""TeamMate: balanced team formation for game and sports clubs.

A Streamlit app that splits a participant pool into fixed-size teams balanced
on personality type, preferred role and preferred game.
"""

import io
import logging
import time

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from teammate.csv_io import (
    decode_csv_bytes,
    export_formation_csv,
    read_participants_csv,
    write_formation_csv,
)
from teammate.formation_config import (
    MAX_TEAM_SIZE,
    MIN_TEAM_SIZE,
    FormationConfig,
    load_formation_config,
)
from teammate.formation_job import FormationJob, start_formation_job
from teammate.formation_repository import FormationRecord, FormationRepository
from teammate.participant_models import Participant
from teammate.participant_repository import ParticipantRepository
from teammate.sample_participants import generate_sample_participants
from teammate.team_models import AllocationResult


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
@st.cache_resource
def _get_config() -> FormationConfig:
    return load_formation_config()


def _participants_from_source(source: str, config: FormationConfig) -> list[Participant]:
    if source == "Registry":
        return ParticipantRepository(config.participants_path).load_participants()
    if source == "Sample data":
        count = st.sidebar.number_input("Sample size", min_value=1, max_value=500, value=40)
        return generate_sample_participants(int(count), seed=config.seed if config.seed is not None else 42)

    uploaded = st.sidebar.file_uploader("Participants CSV", type=["csv"])
    if uploaded is None:
        return []
    try:
        return read_participants_csv(io.StringIO(decode_csv_bytes(uploaded.getvalue())))
    except ValueError as e:
        st.sidebar.error(f"✗ {e}")
        return []


def _participant_rows(participants: list[Participant]) -> list[dict]:
    return [
        {
            "ID": p.id,
            "Name": p.name,
            "Game": p.game.value,
            "Skill": p.skill_level,
            "Role": p.role.value,
            "Personality": f"{p.personality_type.value} ({p.personality_score})",
        }
        for p in participants
    ]


def _render_result(result: AllocationResult, job: FormationJob, config: FormationConfig) -> None:
    stats = job.statistics
    if stats is not None:
        c1, c2, c3, c4, c5 = st.columns(5)
        c1.metric("Total Participants", stats.total_participants)
        c2.metric("Team Size", stats.team_size)
        c3.metric("Teams Formed", stats.teams_formed)
        c4.metric("Assigned", stats.participants_assigned)
        c5.metric("Remaining", stats.participants_remaining)

    for team in result.teams:
        with st.expander(
            f"Team {team.team_id} - avg skill {team.average_skill():.1f}, "
            f"{team.role_diversity()} unique roles",
            expanded=team.team_id == 1,
        ):
            st.dataframe(_participant_rows(team.members), use_container_width=True, hide_index=True)

    if result.leftovers:
        st.subheader(f"Remaining participants ({len(result.leftovers)})")
        st.dataframe(_participant_rows(result.leftovers), use_container_width=True, hide_index=True)

    buffer = io.StringIO()
    write_formation_csv(result, buffer)
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "⬇️ Download formation CSV",
            data=buffer.getvalue(),
            file_name="formed_teams.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with col2:
        if st.button("💾 Save formation", use_container_width=True, disabled=stats is None):
            try:
                FormationRepository(config.formation_path).save_formation(
                    FormationRecord(result=result, statistics=stats)
                )
                csv_path = export_formation_csv(result, config.formation_csv_path)
                st.success(f"✓ Formation saved (CSV: {csv_path})")
            except ValueError as e:
                st.error(f"✗ {e}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main() -> None:
    st.set_page_config(
        page_title="TeamMate Formation",
        page_icon="👥",
        layout="wide",
    )

    st.title("👥 TeamMate Formation")
    st.caption("Balanced teams by personality, role and game")

    config = _get_config()

    # -- Sidebar --
    with st.sidebar:
        st.header("⚙️ Settings")
        team_size = st.slider(
            "Team size", min_value=MIN_TEAM_SIZE, max_value=MAX_TEAM_SIZE, value=config.team_size,
        )
        seed_text = st.text_input(
            "Shuffle seed",
            value="" if config.seed is None else str(config.seed),
            help="Leave empty for a fresh random order on every run",
        )
        source = st.radio("Participants", ["Registry", "CSV upload", "Sample data"])

    participants = _participants_from_source(source, config)

    try:
        seed = int(seed_text) if seed_text.strip() else None
    except ValueError:
        st.sidebar.error("Seed must be an integer")
        seed = None

    with st.sidebar:
        st.caption(f"{len(participants)} participants loaded")
        start_btn = st.button(
            "🚀 Form teams",
            type="primary",
            use_container_width=True,
            disabled=not participants,
        )

    if "formation_job" not in st.session_state:
        st.session_state.formation_job = None
    if "formation_running" not in st.session_state:
        st.session_state.formation_running = False

    # -- Handle start button --
    if start_btn and not st.session_state.formation_running:
        st.session_state.formation_job = start_formation_job(participants, team_size, seed=seed)
        st.session_state.formation_running = True
        st.session_state.formation_started_at = time.time()

    job: FormationJob | None = st.session_state.formation_job

    if st.session_state.formation_running and job is not None:
        if not job.done:
            elapsed = time.time() - st.session_state.get("formation_started_at", time.time())
            col1, col2 = st.columns([3, 1])
            with col1:
                st.info(f"🔄 Forming teams... ({elapsed:.1f}s)")
            with col2:
                if st.button("🛑 Cancel", use_container_width=True):
                    job.mark_cancelled()
                    st.session_state.formation_running = False
                    st.rerun()
            time.sleep(0.5)
            st.rerun()
        st.session_state.formation_running = False

    if job is None:
        st.info("👈 Pick a participant source and team size, then click 'Form teams'")
        with st.expander(f"Participants ({len(participants)})"):
            st.dataframe(_participant_rows(participants), use_container_width=True, hide_index=True)
        return

    if job.cancelled:
        st.warning("⚠️ Team formation was cancelled")
    elif job.error:
        st.error(f"✗ {job.error}")
    elif job.result is not None:
        st.success(f"✓ Successfully formed {len(job.result.teams)} teams!")
        _render_result(job.result, job, config)


main()
