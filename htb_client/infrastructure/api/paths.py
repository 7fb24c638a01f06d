"""Fixed HTB API host, paths, query keys and product/subscription names."""

from typing import Literal, TypeAlias

HTB_HOST = "https://www.hackthebox.eu"

PATH_LIST_RETIRED_LAB_MACHINES = "/api/v4/machine/list/retired/paginated"
PATH_LIST_ACTIVE_LAB_MACHINES = "/api/v4/machine/paginated"
PATH_VPN_SERVERS = "/api/v4/connections/servers"
PATH_ACTIVE_LAB_MACHINE = "/api/v4/machine/active"
PATH_SPAWN_LAB_MACHINE = "/api/v4/vm/spawn"
PATH_TERMINATE_LAB_MACHINE = "/api/v4/vm/terminate"

HTBPath: TypeAlias = Literal[
    "/api/v4/machine/list/retired/paginated",
    "/api/v4/machine/paginated",
    "/api/v4/connections/servers",
    "/api/v4/machine/active",
    "/api/v4/vm/spawn",
    "/api/v4/vm/terminate",
]

QUERY_KEY_PER_PAGE = "per_page"
QUERY_KEY_KEYWORD = "keyword"
QUERY_KEY_PRODUCT = "product"

# Listings are never paged past the first page.
MACHINES_PAGE_SIZE = 100

PRODUCT_LABS = "labs"
PRODUCT_STARTING_POINT = "starting_point"
PRODUCT_ENDGAME = "endgame"
PRODUCT_FORTRESSES = "fortresses"
PRODUCT_PROLABS = "prolabs"
PRODUCT_COMPETITIVE = "competitive"

HTBProduct: TypeAlias = Literal[
    "labs", "starting_point", "endgame", "fortresses", "prolabs", "competitive"
]

SUBSCRIPTION_FREE = "free"
SUBSCRIPTION_VIP_PLUS = "vip+"
SUBSCRIPTION_VIP = "vip"

HTBLabSubscription: TypeAlias = Literal["free", "vip+", "vip"]

# Match order for subscription tokens; "vip+" must precede "vip".
SUBSCRIPTION_MATCH_ORDER: tuple[str, ...] = (
    SUBSCRIPTION_FREE,
    SUBSCRIPTION_VIP_PLUS,
    SUBSCRIPTION_VIP,
)

CONTENT_TYPE_JSON = "application/json"
