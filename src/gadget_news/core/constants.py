from __future__ import annotations

GADGET_CATEGORIES = ("Mobile", "PC", "Wearable", "Audio", "Smart Home")  # 프론트엔드가 아는 카테고리 (닫힌 집합)
DEFAULT_CATEGORY = "Mobile"

RELEVANCE_KEYWORDS = (  # 제목에 하나라도 포함되면 가젯 기사로 간주
    "iphone", "android", "スマホ", "スマートフォン", "pixel", "galaxy", "xperia",
    "macbook", "surface", "ノートpc", "パソコン", "pc", "laptop",
    "apple watch", "galaxy watch", "fitbit", "ウェアラブル", "スマートウォッチ",
    "airpods", "イヤホン", "ヘッドホン", "スピーカー", "オーディオ", "sony wh", "bose",
    "alexa", "google home", "スマートホーム", "スマート家電", "iot", "nest",
    "タブレット", "ipad", "新製品", "発売", "発表", "レビュー",
)

# 카테고리 추정 규칙: 위에서부터 검사하고 처음 맞는 규칙이 이긴다.
# 게임기/GPU 기사는 별도 카테고리가 없으므로 PC로 묶는다.
CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("PC", (
        "playstation", "ps5", "nintendo", "switch", "steam deck", "xbox",
        "geforce", "rtx", "gaming", "ゲーミング",
    )),
    ("Mobile", ("iphone", "android", "スマホ", "galaxy", "pixel")),
    ("PC", ("macbook", "pc", "パソコン", "laptop", "surface")),
    ("Wearable", ("watch", "ウェアラブル", "fitbit", "リング")),
    ("Audio", ("airpods", "イヤホン", "ヘッドホン", "スピーカー", "オーディオ")),
    ("Smart Home", ("alexa", "google home", "スマートホーム", "nest")),
)

TREND_KEYWORDS = (  # 트렌드 판정용 제품명 (관련성 키워드와 별도로 관리)
    "iphone", "pixel", "galaxy", "macbook", "surface", "airpods", "apple watch",
)

PRICE_UNDETERMINED = "価格未定"
SUMMARY_TEMPLATE = "{title}に関する最新情報です。詳細は記事をご覧ください。"
NO_CONTENT_PLACEHOLDER = "（内容なし）"
PRICE_TEXT_FORMAT = "¥{price:,}"

IMAGE_URL_BLOCKLIST = ("icon", "logo", "pixel", "1x1")  # 아이콘/로고/트래킹 픽셀 추정
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")
CONTENT_IMAGE_SELECTOR = "article img, .article img, .content img, main img"

DEFAULT_PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1519389950473-47ba0277781c?w=400&h=300&fit=crop"
PLACEHOLDER_IMAGES = {
    "Mobile": "https://images.unsplash.com/photo-1592750475338-74b7b21085ab?w=400&h=300&fit=crop",
    "PC": "https://images.unsplash.com/photo-1517336714731-489689fd1ca8?w=400&h=300&fit=crop",
    "Wearable": "https://images.unsplash.com/photo-1546868871-7041f2a55e12?w=400&h=300&fit=crop",
    "Audio": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400&h=300&fit=crop",
    "Smart Home": "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=400&h=300&fit=crop",
}
