"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "아이덴티티 프리즘",
        "en": "Identity Prism",
    },
    "label_identity": {
        "ko": "지갑 주소",
        "en": "Wallet address",
    },
    "label_badges": {
        "ko": "배지",
        "en": "Badges",
    },
    "label_activity": {
        "ko": "활동",
        "en": "Activity",
    },
    "label_holdings": {
        "ko": "보유 자산",
        "en": "Holdings",
    },
    "label_score": {
        "ko": "아이덴티티 점수",
        "en": "Identity Score",
    },
    "label_tier": {
        "ko": "등급",
        "en": "Rarity",
    },
    "label_bonuses": {
        "ko": "적용된 보너스",
        "en": "Bonuses Applied",
    },
    "label_textures": {
        "ko": "행성 표면",
        "en": "Planet surfaces",
    },
    "btn_demo": {
        "ko": "데모 값 불러오기",
        "en": "Load demo traits",
    },
    "placeholder": {
        "ko": "지갑 주소를 입력하면 나만의 항성계가 나타나요",
        "en": "Enter a wallet address to reveal its star system",
    },
    "bonus_traits": {
        "ko": "특성",
        "en": "Traits",
    },
    "bonus_balance": {
        "ko": "잔액",
        "en": "Balance",
    },
    "bonus_age": {
        "ko": "지갑 나이",
        "en": "Wallet age",
    },
    "bonus_activity": {
        "ko": "거래 활동",
        "en": "Transactions",
    },
}


def t(key: str, lang: str) -> str:
    """Sidebar and metric label for ``key`` in ``lang`` ("ko" or "en").

    Other languages read the English label. An unknown key comes back
    unchanged, so a missing label shows up as its key in the app.
    """
    labels = _STRINGS.get(key, {})
    return labels.get(lang) or labels.get("en", key)
