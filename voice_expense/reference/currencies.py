"""
Currency Reference Table

36 supported currencies with every symbol variant and spoken keyword
the detector should recognise.

DESIGN DECISION: Symbol variants are enumerated per currency instead of
normalizing the transcript first. Speech-to-text may emit either rupee
sign (U+20B9 or U+20A8), "Rs" or "Rs.", and all of them must resolve to INR.

Keywords are lowercase and match case-insensitively. Symbols that contain
letters ("Rs", "RM", "Ft") match exactly as written. A keyword shared by
several currencies ("peso", "dinar", "krone") is resolved by the
detector's tie-break rules, so the order of this table matters: it is the
last-resort tie-break.

Names that are also everyday English words ("won", "rand", "dong",
"crown") are kept apart in amount_keywords. They only count right after
a number: "5000 won" is KRW, "I won a bet" is not.
"""

from types import MappingProxyType
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from voice_expense.models.expense import CurrencyCode


class ReferenceDataError(Exception):
    """Base exception for reference table lookups."""
    pass


class UnknownCurrencyError(ReferenceDataError):
    """Code is not one of the supported currencies."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unsupported currency code: {code!r}")


class CurrencyDefinition(BaseModel):
    """One row of the currency table."""
    model_config = ConfigDict(frozen=True)

    code: CurrencyCode
    display_name: str
    symbols: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Display symbol first, then every other written variant"
    )
    keywords: tuple[str, ...] = Field(
        default=(),
        description="Spoken names, lowercase"
    )
    amount_keywords: tuple[str, ...] = Field(
        default=(),
        description="Spoken names that are also everyday English words; "
                    "they only count right after a number"
    )
    is_rtl: bool = False

    @property
    def symbol(self) -> str:
        """Primary display symbol."""
        return self.symbols[0]


def _currency(
    code, display_name, symbols, keywords, amount_keywords=(), is_rtl=False
) -> CurrencyDefinition:
    return CurrencyDefinition(
        code=code,
        display_name=display_name,
        symbols=tuple(symbols),
        keywords=tuple(keywords),
        amount_keywords=tuple(amount_keywords),
        is_rtl=is_rtl,
    )


# Markets the app ships in first. Used to break ties between equally long
# matches ("dollar" is USD, not AUD).
COMMON_CURRENCY_PRIORITY: tuple[CurrencyCode, ...] = (
    CurrencyCode.AED,
    CurrencyCode.USD,
    CurrencyCode.EUR,
    CurrencyCode.GBP,
    CurrencyCode.INR,
    CurrencyCode.SAR,
)

# ISO codes that are also everyday English words. They only match when
# written in capitals ("500 TRY", not "I'll try"; "RON", not "Ron").
CASE_SENSITIVE_CODES: frozenset[CurrencyCode] = frozenset({
    CurrencyCode.RON,
    CurrencyCode.RUB,
    CurrencyCode.TRY,
})


CURRENCIES: tuple[CurrencyDefinition, ...] = (
    _currency(
        CurrencyCode.AED, "UAE Dirham",
        ["د.إ", "dh", "dhs", "Dh", "Dhs", "DH", "DHS"],
        ["dirham", "dirhams", "emirati dirham", "emirati dirhams",
         "uae dirham", "uae dirhams"],
        is_rtl=True,
    ),
    _currency(
        CurrencyCode.AUD, "Australian Dollar",
        ["A$", "AU$"],
        ["australian dollar", "australian dollars", "aussie dollar", "aussie dollars"],
    ),
    _currency(
        CurrencyCode.BHD, "Bahraini Dinar",
        [".د.ب", "BD"],
        ["bahraini dinar", "bahraini dinars", "dinar", "dinars"],
        is_rtl=True,
    ),
    _currency(
        CurrencyCode.BRL, "Brazilian Real",
        ["R$"],
        ["brazilian real", "brazilian reals", "brazilian reais", "reais"],
    ),
    _currency(
        CurrencyCode.CAD, "Canadian Dollar",
        ["C$", "CA$"],
        ["canadian dollar", "canadian dollars", "loonie", "loonies"],
    ),
    _currency(
        CurrencyCode.CHF, "Swiss Franc",
        ["Fr.", "SFr."],
        ["swiss franc", "swiss francs", "franc", "francs"],
    ),
    _currency(
        CurrencyCode.CNY, "Chinese Yuan",
        ["元", "CN¥", "RMB"],
        ["yuan", "chinese yuan", "renminbi"],
    ),
    _currency(
        CurrencyCode.CZK, "Czech Koruna",
        ["Kč"],
        ["czech koruna", "koruna", "korunas", "koruny"],
        ["crown", "crowns"],
    ),
    _currency(
        CurrencyCode.DKK, "Danish Krone",
        ["DKK"],
        ["danish krone", "danish kroner", "krone", "kroner"],
    ),
    _currency(
        CurrencyCode.EUR, "Euro",
        ["€"],
        ["euro", "euros"],
    ),
    _currency(
        CurrencyCode.GBP, "British Pound",
        ["£"],
        ["pound", "pounds", "pound sterling", "british pound", "british pounds",
         "sterling", "quid"],
    ),
    _currency(
        CurrencyCode.HKD, "Hong Kong Dollar",
        ["HK$"],
        ["hong kong dollar", "hong kong dollars"],
    ),
    _currency(
        CurrencyCode.HUF, "Hungarian Forint",
        ["Ft"],
        ["forint", "forints", "hungarian forint"],
    ),
    _currency(
        CurrencyCode.IDR, "Indonesian Rupiah",
        ["Rp"],
        ["rupiah", "rupiahs", "indonesian rupiah"],
    ),
    _currency(
        CurrencyCode.INR, "Indian Rupee",
        ["₹", "₨", "Rs", "Rs."],
        ["rupee", "rupees", "indian rupee", "indian rupees"],
    ),
    _currency(
        CurrencyCode.JPY, "Japanese Yen",
        ["¥", "円", "JP¥"],
        ["yen", "japanese yen"],
    ),
    _currency(
        CurrencyCode.KRW, "South Korean Won",
        ["₩"],
        ["korean won", "south korean won"],
        ["won"],
    ),
    _currency(
        CurrencyCode.KWD, "Kuwaiti Dinar",
        ["د.ك", "KD"],
        ["kuwaiti dinar", "kuwaiti dinars", "dinar", "dinars"],
        is_rtl=True,
    ),
    _currency(
        CurrencyCode.MXN, "Mexican Peso",
        ["MX$", "Mex$"],
        ["mexican peso", "mexican pesos", "peso", "pesos"],
    ),
    _currency(
        CurrencyCode.MYR, "Malaysian Ringgit",
        ["RM"],
        ["ringgit", "ringgits", "malaysian ringgit"],
    ),
    _currency(
        CurrencyCode.NOK, "Norwegian Krone",
        ["NOK"],
        ["norwegian krone", "norwegian kroner", "krone", "kroner"],
    ),
    _currency(
        CurrencyCode.NZD, "New Zealand Dollar",
        ["NZ$"],
        ["new zealand dollar", "new zealand dollars", "kiwi dollar", "kiwi dollars"],
    ),
    _currency(
        CurrencyCode.OMR, "Omani Rial",
        ["ر.ع."],
        ["omani rial", "omani rials", "rial", "rials"],
        is_rtl=True,
    ),
    _currency(
        CurrencyCode.PHP, "Philippine Peso",
        ["₱"],
        ["philippine peso", "philippine pesos", "peso", "pesos"],
    ),
    _currency(
        CurrencyCode.PLN, "Polish Zloty",
        ["zł"],
        ["zloty", "zlotys", "zlote", "polish zloty"],
    ),
    _currency(
        CurrencyCode.QAR, "Qatari Riyal",
        ["ر.ق"],
        ["qatari riyal", "qatari riyals"],
        is_rtl=True,
    ),
    _currency(
        CurrencyCode.RON, "Romanian Leu",
        ["lei"],
        ["leu", "romanian leu", "romanian lei"],
    ),
    _currency(
        CurrencyCode.RUB, "Russian Ruble",
        ["₽"],
        ["ruble", "rubles", "rouble", "roubles", "russian ruble", "russian rubles"],
    ),
    _currency(
        CurrencyCode.SAR, "Saudi Riyal",
        ["﷼", "ر.س"],
        ["riyal", "riyals", "saudi riyal", "saudi riyals"],
        is_rtl=True,
    ),
    _currency(
        CurrencyCode.SEK, "Swedish Krona",
        ["SEK"],
        ["swedish krona", "swedish kronor", "krona", "kronor"],
    ),
    _currency(
        CurrencyCode.SGD, "Singapore Dollar",
        ["S$"],
        ["singapore dollar", "singapore dollars"],
    ),
    _currency(
        CurrencyCode.THB, "Thai Baht",
        ["฿"],
        ["baht", "thai baht"],
    ),
    _currency(
        CurrencyCode.TRY, "Turkish Lira",
        ["₺"],
        ["lira", "liras", "turkish lira", "turkish liras"],
    ),
    _currency(
        CurrencyCode.USD, "US Dollar",
        ["$", "US$"],
        ["dollar", "dollars", "buck", "bucks", "us dollar", "us dollars",
         "american dollar", "american dollars"],
    ),
    _currency(
        CurrencyCode.VND, "Vietnamese Dong",
        ["₫"],
        ["vietnamese dong"],
        ["dong"],
    ),
    _currency(
        CurrencyCode.ZAR, "South African Rand",
        ["ZAR"],
        ["south african rand"],
        ["rand", "rands"],
    ),
)

CURRENCY_BY_CODE = MappingProxyType({c.code: c for c in CURRENCIES})


def get_currency(code: Union[str, CurrencyCode]) -> CurrencyDefinition:
    """
    Look up a currency definition by ISO code (case-insensitive).

    Raises:
        UnknownCurrencyError: If the code is not supported
    """
    try:
        return CURRENCY_BY_CODE[CurrencyCode(str(getattr(code, "value", code)).strip().upper())]
    except (ValueError, KeyError):
        raise UnknownCurrencyError(str(code)) from None
