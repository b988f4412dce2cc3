"""Identity Prism — Streamlit app previewing an account's score and star system."""

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from identityprism.compute import demo_attributes, run  # noqa: E402
from identityprism.config import configure_logging, load_settings  # noqa: E402
from identityprism.i18n import t  # noqa: E402
from identityprism.models import AttributeRecord  # noqa: E402
from identityprism.renderers.plotly_3d import render_plotly_scene  # noqa: E402
from identityprism.texture import synthesize_scene_textures  # noqa: E402

_settings = load_settings()
configure_logging(_settings.log_level)

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="wide",
)

if "identity" not in st.session_state:
    st.session_state.identity = ""
if "defaults" not in st.session_state:
    st.session_state.defaults = demo_attributes()

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #02030a !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] { display: none !important; }
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Attribute inputs ---
with st.sidebar:
    identity = st.text_input(t("label_identity", _lang), value=st.session_state.identity)
    if st.button(t("btn_demo", _lang), use_container_width=True):
        st.session_state.identity = identity
        st.session_state.defaults = demo_attributes(identity or None)
        st.rerun()
    d: AttributeRecord = st.session_state.defaults

    st.subheader(t("label_badges", _lang))
    has_seeker = st.checkbox("Seeker Genesis", value=d.has_seeker)
    has_preorder = st.checkbox("Chapter 2 Preorder", value=d.has_preorder)
    is_blue_chip = st.checkbox("Blue Chip", value=d.is_blue_chip)
    is_meme_lord = st.checkbox("Meme Lord", value=d.is_meme_lord)
    is_defi_king = st.checkbox("DeFi King", value=d.is_defi_king)
    diamond_hands = st.checkbox("Diamond Hands", value=d.diamond_hands)
    hyperactive = st.checkbox("Hyperactive", value=d.hyperactive)

    st.subheader(t("label_holdings", _lang))
    unique_tokens = st.number_input("Tokens", min_value=0, value=d.unique_token_count, step=1)
    nft_count = st.number_input("NFTs", min_value=0, value=d.nft_count, step=1)
    sol_balance = st.number_input("SOL", min_value=0.0, value=float(d.sol_balance), step=0.1)

    st.subheader(t("label_activity", _lang))
    tx_count = st.number_input("Transactions", min_value=0, value=d.tx_count, step=10)
    wallet_age_days = st.number_input("Wallet age (days)", min_value=0, value=d.wallet_age_days, step=30)

attributes = AttributeRecord(
    has_seeker=has_seeker,
    has_preorder=has_preorder,
    has_combo=has_seeker and has_preorder,
    is_blue_chip=is_blue_chip,
    is_defi_king=is_defi_king,
    is_meme_lord=is_meme_lord,
    diamond_hands=diamond_hands,
    hyperactive=hyperactive,
    unique_token_count=int(unique_tokens),
    nft_count=int(nft_count),
    tx_count=int(tx_count),
    avg_tx_per_day=int(tx_count) / 30,
    sol_balance=float(sol_balance),
    wallet_age_days=int(wallet_age_days),
    total_asset_count=int(unique_tokens) + int(nft_count),
)

# No identity yet: starfield-only view
result = run(attributes, identity) if identity else None

col_chart, col_info = st.columns([3, 1])
with col_chart:
    st.plotly_chart(
        render_plotly_scene(None if result is None else result.scene),
        use_container_width=True,
        config={"scrollZoom": True, "displayModeBar": False},
    )
    if result is None:
        st.markdown(
            f"<div style='text-align:center; color:#334466;'>{t('placeholder', _lang)}</div>",
            unsafe_allow_html=True,
        )

if result is not None:
    with col_info:
        st.metric(t("label_score", _lang), result.score)
        st.metric(t("label_tier", _lang), result.tier.label.upper())
        st.caption(t("label_bonuses", _lang))
        b = result.breakdown
        st.markdown(
            f"- {t('bonus_traits', _lang)}: +{b.trait_bonus} ({', '.join(b.contributing_traits) or '—'})\n"
            f"- {t('bonus_balance', _lang)}: +{b.balance_bonus}\n"
            f"- {t('bonus_age', _lang)}: +{b.wallet_age_bonus}\n"
            f"- {t('bonus_activity', _lang)}: +{b.activity_bonus:g}"
        )

    st.subheader(t("label_textures", _lang))
    textures = synthesize_scene_textures(
        result.scene, _settings.texture_config(), _settings.texture_workers
    )
    cols = st.columns(min(len(textures), 5) or 1)
    for planet in result.scene.planets:
        with cols[planet.index % len(cols)]:
            st.image(textures[planet.index].color_map, caption=planet.planet_type.name)
