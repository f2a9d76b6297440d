"""Default rate table for the courtquote service.

Rates are in whole rupees (INR), exclusive of GST. Subbase and flooring
are per square metre, edgewall and fencing per running metre, drainage
per 4.5 m drainage unit, lighting per fixture and equipment per piece.
"""

from courtquote.models.enums import FencingType, FlooringType, LightType, SubbaseType
from courtquote.models.rate_table import RateTable

DEFAULT_RATE_TABLE_NAME = "default"

DEFAULT_RATE_TABLE = RateTable(
    name=DEFAULT_RATE_TABLE_NAME,
    subbase={
        SubbaseType.CONCRETE: 1200.0,
        SubbaseType.BITUMINOUS: 950.0,
        SubbaseType.WBM: 650.0,
    },
    edgewall=850.0,
    drainage=1500.0,
    fencing={
        FencingType.CHAINLINK: 1100.0,
        FencingType.WELD_MESH: 1400.0,
        FencingType.GARRISON: 2200.0,
    },
    flooring={
        FlooringType.SYNTHETIC: 1800.0,
        FlooringType.ACRYLIC: 950.0,
        FlooringType.PVC: 1300.0,
        FlooringType.WOODEN: 4500.0,
        FlooringType.ARTIFICIAL_GRASS: 850.0,
        FlooringType.RUBBER: 2100.0,
    },
    lighting={
        LightType.STANDARD: 6500.0,
        LightType.LED: 9500.0,
        LightType.PREMIUM_LED: 14000.0,
    },
    equipment={
        "basketball_post": 85000.0,
        "badminton_post": 18000.0,
        "tennis_post": 22000.0,
        "volleyball_post": 16000.0,
        "pickleball_net": 12000.0,
        "football_goal": 45000.0,
        "cricket_net": 30000.0,
        "scoreboard": 25000.0,
        "player_bench": 9000.0,
    },
)
