"""Configuration constants for the ANA award scraper"""

from pathlib import Path

from .models import CabinClass

# Site configuration
BASE_URL = "https://aswbe-i.ana.co.jp"
SEARCH_URL = (
    f"{BASE_URL}/international_asw/pages/award/search/roundtrip/"
    "award_search_roundtrip_input.xhtml?CONNECTION_KIND=JPN&LANG=en"
)
DEFAULT_OUTPUT_DIR = Path("./output")

# Credentials are read from the environment when not passed explicitly
USERNAME_ENV_VAR = "ANA_USERNAME"
PASSWORD_ENV_VAR = "ANA_PASSWORD"

# Cabins exposed by the award booking flow (premium economy is not)
SUPPORTED_CABINS = frozenset(
    {
        CabinClass.ECONOMY,
        CabinClass.BUSINESS,
        CabinClass.FIRST,
    }
)

# Login selectors
LOGOUT_SELECTOR = "li.btnLogoutArea"
LOGOUT_LINK_SELECTOR = "li.btnLogoutArea > a"
ACCOUNT_NUMBER_SELECTOR = "#accountNumber"
PASSWORD_SELECTOR = "#password"
REMEMBER_LOGIN_SELECTOR = "#rememberLogin"
LOGIN_SUBMIT_SELECTOR = "#amcMemberLogin"

# Search form selectors
MIXED_CABIN_SELECTOR = "li.lastChild.deselection"
TRAVEL_ARRANGER_SELECTOR = "#travelArranger"
SEARCH_SUBMIT_SELECTOR = 'input[value="Search"]'
FLIGHT_RADIO_SELECTOR = 'i[role="radio"]'
NEXT_BUTTON_SELECTOR = "#nextButton"

# Page state selectors
LOADING_SELECTOR = "div.loadingArea"
MODAL_ERROR_SELECTOR = ".modalError"
MESSAGE_AREA_SELECTOR = "#cmnContainer .messageArea"
MESSAGE_DISMISS_SELECTOR = "#cmnContainer .buttonArea input"
MODAL_ERROR_PHRASE = "there are errors"

# In-page airport directory
AIRPORT_LIST_SCRIPT = "() => Asw.AirportList.airports"

# Timeouts (milliseconds)
LOGIN_PROBE_TIMEOUT = 10000
NAVIGATION_TIMEOUT = 90000
ACTION_TIMEOUT = 30000
SPINNER_APPEAR_TIMEOUT = 1000
SPINNER_HIDDEN_TIMEOUT = 120000

# Fixed pauses (milliseconds)
FORM_HYDRATION_DELAY = 1000
LAYOUT_CHANGE_DELAY = 1000
PRE_SUBMIT_DELAY = 500
LOGIN_VALIDATION_DELAY = 250
SETTLE_GRACE_DELAY = 1000
KEYSTROKE_DELAY = 10

# Randomized pause before advancing to the inbound leg (milliseconds)
LEG_ADVANCE_MIN_DELAY = 3000
LEG_ADVANCE_MAX_DELAY = 6000
