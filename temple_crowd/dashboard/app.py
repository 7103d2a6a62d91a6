"""Streamlit dashboard for the crowd density predictor.

Provides dataset generation with progress feedback, live what-if
predictions with an hourly profile chart, a dataset preview with CSV
download, and per-location quartiles with busiest-hour charts.
"""

from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd
import plotly.express as px
import streamlit as st

from temple_crowd.model.profiles import FESTIVAL_DATES, LOCATIONS, WEATHER_CONDITIONS
from temple_crowd.utils.config import AppConfig, load_config

DEFAULT_CONFIG_PATH = "configs/config.yaml"
MIN_SAMPLES = 1000
MAX_SAMPLES = 70000

TIER_COLORS = {
    "Low": "#b6c6d6",
    "Medium": "#ffd479",
    "High": "#ff8aa1",
    "VeryHigh": "#ff4f6d",
    "Unavailable": "#b6c6d6",
}


def load_dashboard_config(config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load the app config, using defaults when the file is absent."""
    if not Path(config_path).exists():
        return AppConfig()
    return load_config(config_path)


def default_sample_count(app_config: AppConfig) -> int:
    """Clamp the configured sample count into the slider range."""
    return min(max(app_config.dashboard.sample_count, MIN_SAMPLES), MAX_SAMPLES)


def quartile_rows(stats: dict) -> list[dict]:
    """Shape per-location stats into quartile table rows."""
    return [
        {
            "Location": name.replace("_", " "),
            "Q1": s.quartiles.q1,
            "Q2": s.quartiles.q2,
            "Q3": s.quartiles.q3,
        }
        for name, s in stats.items()
    ]


def random_prediction(predictor, days_ahead: int = 90):
    """Draw a random upcoming visit and predict it.

    Returns:
        Tuple of (visit date, visit context, prediction).
    """
    visit_date, context = predictor.generator.random_context(days_ahead)
    return visit_date, context, predictor.predict(context)


def main() -> None:
    """Entry point for the Streamlit dashboard."""
    from temple_crowd.utils.logger import setup_logger

    st.set_page_config(page_title="Temple Crowd Density", layout="wide")

    if "app_config" not in st.session_state:
        st.session_state.app_config = load_dashboard_config()
    if "predictor" not in st.session_state:
        st.session_state.predictor = None
    if "prediction" not in st.session_state:
        st.session_state.prediction = None

    app_config = st.session_state.app_config
    setup_logger(
        "temple_crowd",
        log_file=app_config.logging.file,
        level=app_config.logging.level,
    )

    st.title("Temple & Tourist Spot Crowd Density Predictor")

    with st.sidebar:
        st.header("Dataset")
        sample_count = st.slider(
            "Synthetic samples",
            MIN_SAMPLES,
            MAX_SAMPLES,
            default_sample_count(app_config),
            1000,
        )
        seed = st.number_input("Seed (0 = random)", min_value=0, value=0, step=1)
        if st.button("Build Dataset") or st.session_state.predictor is None:
            _build_dataset(app_config, sample_count, int(seed) or None)

    tab1, tab2, tab3 = st.tabs(["Predict", "Dataset Preview", "Location Analytics"])

    with tab1:
        _predict_tab()
    with tab2:
        _preview_tab(app_config.export.preview_rows)
    with tab3:
        _location_analytics_tab()


def _build_dataset(
    app_config: AppConfig, sample_count: int, seed: Optional[int]
) -> None:
    """Generate the corpus in batches with a progress bar.

    Also predicts today's default form values once, so the Predict tab
    opens with a result.

    Args:
        app_config: Loaded configuration; generator settings are reused.
        sample_count: Number of observations to generate.
        seed: Optional seed for reproducible datasets.
    """
    from dataclasses import replace

    from temple_crowd.generation.generator import DatasetGenerator, is_weekend
    from temple_crowd.model.footfall import VisitContext
    from temple_crowd.predictor import CrowdDensityPredictor

    with st.spinner("Generating dataset..."):
        progress_bar = st.progress(0)
        status_text = st.empty()

        def update_progress(current: int, total: int) -> None:
            if total > 0:
                progress_bar.progress(current / total)
                status_text.text(f"Generated {current:,} / {total:,}")

        gen_config = replace(app_config.generator, count=sample_count, seed=seed)
        predictor = CrowdDensityPredictor(DatasetGenerator(gen_config))
        predictor.build(sample_count, progress_callback=update_progress)

    today = date.today()
    st.session_state.predictor = predictor
    st.session_state.random_visit = (None, None)
    st.session_state.prediction = predictor.predict(
        VisitContext(
            location=LOCATIONS[0],
            hour=18,
            is_festival=today.isoformat() in FESTIVAL_DATES,
            is_holiday=is_weekend(today),
        )
    )
    st.success(
        f"Generated {len(predictor.corpus):,} samples, "
        f"quartiles {predictor.quartiles}"
    )


def _predict_tab() -> None:
    """Render the live prediction form and result."""
    from temple_crowd.model.footfall import VisitContext

    st.header("Predict Crowd Density")
    predictor = st.session_state.predictor
    if predictor is None:
        st.info("Build the dataset first")
        return

    if st.button("Randomize"):
        visit_date, context, prediction = random_prediction(predictor)
        st.session_state.random_visit = (visit_date, context)
        st.session_state.prediction = prediction

    visit_date, defaults = st.session_state.get("random_visit", (None, None))

    col1, col2 = st.columns(2)
    location = col1.selectbox(
        "Location",
        LOCATIONS,
        index=LOCATIONS.index(defaults.location) if defaults else 0,
    )
    visit_day = col1.date_input("Date", value=visit_date or date.today())
    hour = col1.selectbox(
        "Hour",
        list(range(6, 22)),
        index=(defaults.hour - 6) if defaults else 12,
        format_func=lambda h: f"{h}:00",
    )
    weather = col2.selectbox(
        "Weather",
        WEATHER_CONDITIONS,
        index=WEATHER_CONDITIONS.index(defaults.weather_condition) if defaults else 0,
    )
    temperature = col2.number_input(
        "Temperature (C)", value=float(defaults.temperature) if defaults else 26.0
    )
    festival = col2.checkbox(
        "Festival day",
        value=bool(defaults and defaults.is_festival)
        or visit_day.isoformat() in FESTIVAL_DATES,
    )
    holiday = col2.checkbox(
        "Weekend / holiday",
        value=bool(defaults and defaults.is_holiday) or visit_day.weekday() >= 5,
    )

    if st.button("Predict"):
        st.session_state.prediction = predictor.predict(
            VisitContext(
                location=location,
                hour=hour,
                weather_condition=weather,
                temperature=temperature,
                is_festival=festival,
                is_holiday=holiday,
            )
        )

    prediction = st.session_state.prediction
    if prediction is None:
        return

    color = TIER_COLORS.get(prediction.tier.value, TIER_COLORS["Unavailable"])
    st.markdown(
        f"<span style='background:{color};color:#031021;padding:6px 14px;"
        f"border-radius:8px;font-weight:700'>{prediction.tier.display_name}</span>",
        unsafe_allow_html=True,
    )
    c1, c2 = st.columns(2)
    c1.metric("Estimated Footfall", f"{prediction.footfall:,}")
    c2.metric("Quartiles (q1 / q2 / q3)", str(predictor.quartiles))
    st.write(prediction.suggestion)

    profile = predictor.generator.model.hourly_profile(prediction.context.location)
    df = pd.DataFrame(list(profile.items()), columns=["Hour", "Baseline Footfall"])
    fig = px.line(df, x="Hour", y="Baseline Footfall", markers=True, title="Typical Day")
    fig.add_hline(y=prediction.footfall, line_dash="dash", annotation_text="Prediction")
    st.plotly_chart(fig, use_container_width=True)


def _preview_tab(preview_rows: int) -> None:
    """Render the first rows of the dataset with a CSV download."""
    from temple_crowd.utils.export import corpus_to_csv, default_csv_name, preview_frame

    st.header("Dataset Preview")
    predictor = st.session_state.predictor
    if predictor is None or len(predictor.corpus) == 0:
        st.info("Dataset not generated yet")
        return

    st.dataframe(
        preview_frame(predictor.corpus, rows=preview_rows), use_container_width=True
    )
    st.download_button(
        "Download CSV",
        data=corpus_to_csv(predictor.corpus),
        file_name=default_csv_name(),
        mime="text/csv",
    )


def _location_analytics_tab() -> None:
    """Render per-location quartiles and busiest hours."""
    st.header("Location Analytics")
    predictor = st.session_state.predictor
    if predictor is None:
        st.info("Build the dataset first")
        return

    stats = predictor.location_stats()
    st.dataframe(pd.DataFrame(quartile_rows(stats)), use_container_width=True)

    location = st.selectbox("Top hours for", LOCATIONS, key="analytics_location")
    top = stats[location].top_hours
    if top:
        df = pd.DataFrame(
            [{"Hour": f"{h.hour}:00", "Avg Footfall": h.average_footfall} for h in top]
        )
        fig = px.bar(df, x="Hour", y="Avg Footfall", title="Busiest Hours")
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No observations for this location")


if __name__ == "__main__":
    main()
