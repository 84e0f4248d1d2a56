"""
Keyword patterns and tuning constants used by the extraction heuristics.

Kept together as data so the heuristics read as rules over named tables.
All keyword patterns match case-insensitively.
"""

import re

# --- Document scaffold identifiers ---
OVERLAY_DIV_ID = "readOverlay"
INNER_DIV_ID = "readInner"
CONTENT_DIV_ID = "readability-content"
PAGE_ID_PREFIX = "readability-page-"
PAGE_CSS_CLASS = "page"

# Marks paragraphs we created ourselves; their inline style survives cleaning
READABILITY_STYLED_CSS_CLASS = "readability-styled"
READABILITY_STYLED_STYLE = "display: inline;"

# --- Scoring and cleaning thresholds ---
MIN_PARAGRAPH_LENGTH = 25
MIN_INNER_TEXT_LENGTH = 25
PARAGRAPH_SEGMENT_LENGTH = 100
MAX_POINTS_FOR_SEGMENTS_COUNT = 3
MIN_SIBLING_PARAGRAPH_LENGTH = 80
MIN_COMMA_SEGMENTS = 10
LIS_COUNT_THRESHOLD = 100
MAX_IMAGES_IN_SHORT_SEGMENTS_COUNT = 2
MIN_INNER_TEXT_LENGTH_IN_ELEMENTS_WITH_EMBED = 75
CLASS_WEIGHT_THRESHOLD = 25
CLASS_WEIGHT_STEP = 25
MAX_EMBEDS_COUNT = 1
MIN_ARTICLE_CONTENT_LENGTH = 250

SIBLING_SCORE_THRESHOLD_COEFFICIENT = 0.2
MIN_SIBLING_SCORE_THRESHOLD = 10.0
MAX_SIBLING_PARAGRAPH_LINKS_DENSITY = 0.25
MAX_HEADER_LINKS_DENSITY = 0.33
MAX_DENSITY_FOR_ELEMENTS_WITH_SMALLER_CLASS_WEIGHT = 0.2
MAX_DENSITY_FOR_ELEMENTS_WITH_GREATER_CLASS_WEIGHT = 0.5

# --- Title thresholds ---
MAX_ARTICLE_TITLE_LENGTH = 150
MIN_ARTICLE_TITLE_LENGTH = 15
MIN_ARTICLE_TITLE_WORDS_COUNT_1 = 3
MIN_ARTICLE_TITLE_WORDS_COUNT_2 = 4

# --- Pagination ---
MIN_NEXT_PAGE_LINK_SCORE = 50
MAX_PAGES = 30

# Tags whose presence inside a div keeps it from being turned into a paragraph
DIV_TO_P_ELEMENTS = ("a", "blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul")

UNLIKELY_CANDIDATES = re.compile(
    r"combx|comment|community|disqus|extra|foot|header|menu|remark|rss|shoutbox|"
    r"sidebar|side|sponsor|ad-break|agegate|pagination|pager|popup|tweet|twitter",
    re.IGNORECASE,
)

OK_MAYBE_ITS_A_CANDIDATE = re.compile(r"and|article|body|column|main|shadow", re.IGNORECASE)

POSITIVE_WEIGHT = re.compile(
    r"article|body|content|entry|hentry|main|page|pagination|post|text|blog|story",
    re.IGNORECASE,
)

NEGATIVE_WEIGHT = re.compile(
    r"combx|comment|com-|contact|foot|footer|footnote|masthead|media|meta|outbrain|"
    r"promo|related|scroll|shoutbox|sidebar|side|sponsor|shopping|tags|tool|widget",
    re.IGNORECASE,
)

NEGATIVE_LINK_PARENT = re.compile(
    r"(stories|articles|news|documents|posts|notes|series|historie|artykuly|artykuły|"
    r"wpisy|dokumenty|serie|geschichten|erzählungen|erzahlungen)",
    re.IGNORECASE,
)

EXTRANEOUS = re.compile(
    r"print|archive|comment|discuss|e[-]?mail|share|reply|all|login|sign|single|also",
    re.IGNORECASE,
)

DIV_TO_P_ELEMENTS_PATTERN = re.compile(
    "<(" + "|".join(DIV_TO_P_ELEMENTS) + ")", re.IGNORECASE
)

END_OF_SENTENCE = re.compile(r"\.( |$)", re.MULTILINE)

NORMALIZE_SPACES = re.compile(r"\s{2,}")

VIDEO = re.compile(r"https?://(www\.)?(youtube|vimeo)\.com", re.IGNORECASE)

REPLACE_DOUBLE_BRS = re.compile(r"(<br[^>]*>[ \n\r\t]*){2,}", re.IGNORECASE)

REPLACE_FONTS = re.compile(r"<(/?)font[^>]*>", re.IGNORECASE)

LIKELY_PARAGRAPH_DIV = re.compile(r"text|para|parbase", re.IGNORECASE)

# --- Title patterns ---
ARTICLE_TITLE_DASH_1 = re.compile(r" [|\-] ")
ARTICLE_TITLE_DASH_2 = re.compile(r"(.*)[|\-] .*")
ARTICLE_TITLE_DASH_3 = re.compile(r"[^|\-]*[|\-](.*)")
ARTICLE_TITLE_COLON_1 = re.compile(r".*:(.*)")
ARTICLE_TITLE_COLON_2 = re.compile(r"[^:]*[:](.*)")
TITLE_WHITESPACES = re.compile(r"\s+")

# --- Next-page link patterns ---
NEXT_LINK = re.compile(
    r"(next|weiter|continue|dalej|następna|nastepna|>([^|]|$)|»([^|]|$))",
    re.IGNORECASE,
)

NEXT_STORY_LINK = re.compile(
    r"(story|article|news|document|post|note|series|historia|artykul|artykuł|wpis|"
    r"dokument|seria|geschichte|erzählung|erzahlung|artikel|serie)",
    re.IGNORECASE,
)

PREV_LINK = re.compile(r"(prev|earl|[^b]old|new|wstecz|poprzednia|<|«)", re.IGNORECASE)

PAGE = re.compile(r"pag(e|ing|inat)|([^a-z]|^)pag([^a-z]|$)", re.IGNORECASE)

FIRST_OR_LAST = re.compile(r"(first|last)", re.IGNORECASE)

PAGING_HREF = re.compile(r"p(a|g|ag)?(e|ing|ination)?(=|/)[0-9]{1,2}", re.IGNORECASE)
PAGE_WORD_HREF = re.compile(r"(page|paging)", re.IGNORECASE)
SECTION_HREF = re.compile(r"section", re.IGNORECASE)

MAILTO_HREF = re.compile(r"^\s*mailto\s*:", re.IGNORECASE)

INTEGER_TEXT = re.compile(r"\s*[+-]?\d+\s*")

# --- Base URL normalization ---
PAGE_NUMBER_SEGMENT = re.compile(r"((_|-)?p[a-z]*|(_|-))[0-9]{1,2}$", re.IGNORECASE)
TRAILING_PAGE_NUMBER = re.compile(r"(_|-)?[0-9]{1,2}$")
PURE_PAGE_NUMBER_SEGMENT = re.compile(r"^\d{1,2}$")
NON_ALPHA = re.compile(r"[^a-zA-Z]")
ANY_LETTER = re.compile(r"[a-z]", re.IGNORECASE)
CMS_JUNK_TOKENS = (",00", ".00")

# URL pattern → tag name of the element that holds the article on that site
ARTICLE_CONTENT_ELEMENT_HINTS = (
    (re.compile(r"^https?://(www|mobile)\.theverge.com", re.IGNORECASE), "article"),
)
