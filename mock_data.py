"""
Seed portfolio — the holdings the dashboard starts from.

Prices are in INR. `price` is the last known market price; the refresher
moves it from there. P/E and earnings are the base figures the simulated
financials feed jitters around. stage2 marks names on the watch list.
"""
from state.models import Holding


def _h(id, name, symbol, purchase_price, quantity, price, sector,
       pe=None, earnings=None, stage2=False, sale_price=None) -> Holding:
    return Holding(
        id=id,
        name=name,
        symbol=symbol,
        purchase_price=purchase_price,
        quantity=quantity,
        price=price,
        sector=sector,
        pe_ratio=pe,
        latest_earnings=earnings,
        stage2=stage2,
        sale_price=sale_price,
    )


SEED_HOLDINGS: list[Holding] = [
    # Financial
    _h("1",  "HDFC Bank",             "HDFCBANK",   1490.0,  50, 1702.5, "Financials",  pe=19.8, earnings=16_736.0, stage2=True),
    _h("2",  "Bajaj Finance",         "BAJFINANCE", 6466.0,  15, 7155.0, "Financials",  pe=32.1, earnings=4_014.0),
    _h("3",  "ICICI Bank",            "ICICIBANK",   780.0,  84, 1254.3, "Financials",  pe=18.6, earnings=11_746.0, stage2=True),
    _h("4",  "Bajaj Housing Finance", "BAJAJHFL",    130.0, 504,  118.4, "Financials",  pe=45.2, earnings=583.0),
    # Tech
    _h("5",  "Affle India",           "AFFLE",      1151.0,  50, 1496.2, "Technology",  pe=58.3, earnings=98.0, stage2=True),
    _h("6",  "LTIMindtree",           "LTIM",       4775.0,  16, 5180.6, "Technology",  pe=33.4, earnings=1_169.0),
    _h("7",  "KPIT Tech",             "KPITTECH",    672.0,  61, 1298.4, "Technology",  pe=49.7, earnings=204.0),
    _h("8",  "Tata Technologies",     "TATATECH",   1072.0,  63,  705.9, "Technology",  pe=44.1, earnings=157.0),
    _h("9",  "Tanla Platforms",       "TANLA",      1134.0,  45,  612.8, "Technology",  pe=16.9, earnings=118.0),
    # Consumer
    _h("10", "Avenue Supermarts",     "DMART",      3777.0,  27, 4102.0, "Consumer",    pe=92.5, earnings=711.0),
    _h("11", "Tata Consumer",         "TATACONSUM",  845.0,  90, 1071.7, "Consumer",    pe=84.0, earnings=290.0, stage2=True),
    _h("12", "Pidilite Industries",   "PIDILITIND", 2376.0,  36, 2946.5, "Consumer",    pe=73.6, earnings=571.0),
    # Power
    _h("13", "Tata Power",            "TATAPOWER",   224.0, 225,  389.2, "Power",       pe=31.8, earnings=1_017.0),
    _h("14", "KPI Green Energy",      "KPIGREEN",    875.0,  50,  452.6, "Power",       pe=38.2, earnings=93.0),
    _h("15", "Suzlon Energy",         "SUZLON",       44.0, 450,   61.3, "Power",       pe=72.4, earnings=325.0, stage2=True),
    # Pipes
    _h("16", "Astral",                "ASTRAL",     1517.0,  56, 1424.9, "Pipes",       pe=81.0, earnings=120.0),
    _h("17", "Polycab India",         "POLYCAB",    2818.0,  28, 6533.0, "Pipes",       pe=49.2, earnings=600.0),
]
