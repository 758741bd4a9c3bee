# constants.py
import logging

logger = logging.getLogger(__name__)

# Neighborhood heuristics (empirically tuned, overridable through ProbeSettings)
NEARBY_MAX_DISTANCE = 200
NEARBY_MIN_WIDTH = 50
NEARBY_MIN_HEIGHT = 20
MATCH_TOLERANCE = 50
CANDIDATE_SELECTOR = 'div, ul, section'

# Wait after an interaction before re-reading the page
SETTLE_DELAY_MS = 300
POLL_INTERVAL_MS = 100
POLL_TIMEOUT_MS = 2000

NATIVE_INTERACTIVE_TAGS = ['INPUT', 'BUTTON', 'SELECT', 'TEXTAREA', 'A']

# Browser
BROWSER_ARGS = [
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-setuid-sandbox",
    "--no-sandbox",
    "--no-zygote",
    "--ignore-certificate-errors",
]
VIEWPORT = {"width": 1280, "height": 720}
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.110 Safari/537.36"
)
TIMEOUT_NAVIGATION = 60000
TIMEOUT_SELECTOR = 60000

TARGET_URL = "https://flights.aegeanair.com/en/flights-from-istanbul-to-athens"
ANCHOR_SELECTOR = 'div[data-em-cmp="flights-booking"]'

SCREENSHOT_DIR = "/tmp/screenshots"
SCREENSHOT_PREFIX = "element-probe"
S3_BUCKET = "technical-playwright-result"
AWS_REGION = "us-east-2"

_COMBOBOX_BUTTON = 'button[role="combobox"], button[aria-haspopup="listbox"], button'
_DATE_INPUT = 'button, input[type="date"], input'

# name -> probe definition, in probing order
DEFAULT_TARGETS = {
    'journeyTypeDiv': {
        'selector': 'div[data-att="f2_journey-type"]',
        'description': 'Journey type selector',
        'child_selector': _COMBOBOX_BUTTON,
        'interaction': {'type': 'click', 'expect_state_change': True},
    },
    'travelerInfoDiv': {
        'selector': 'div[data-att="f2_traveler-info"]',
        'description': 'Traveler info selector',
        'child_selector': _COMBOBOX_BUTTON,
    },
    'promoCodeDiv': {
        'selector': 'div[data-att="f2_promo-code"]',
        'description': 'Promo code section',
        'child_selector': 'input[type="text"], input',
    },
    'originField': {
        'selector': 'div[data-att="f1_origin"]',
        'description': 'Origin field',
        'child_selector': 'input[type="text"], input, button[role="combobox"]',
        'interaction': {'type': 'focus'},
    },
    'startDateToggler': {
        'selector': 'div[data-att="start-date-toggler"]',
        'description': 'Start date selector',
        'child_selector': _DATE_INPUT,
    },
    'endDateToggler': {
        'selector': 'div[data-att="end-date-toggler"]',
        'description': 'End date selector',
        'child_selector': _DATE_INPUT,
    },
    'searchButton': {
        'selector': 'button:has-text("SEARCH")',
        'description': 'Search button',
        'interaction': {'type': 'hover'},
    },
}
