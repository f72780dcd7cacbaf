"""Static-rate currency conversion.

Rates are expressed as units of the currency per one US dollar, so converting
to USD divides and converting from USD multiplies. Codes missing from the
table convert at a rate of 1 (the amount passes through unchanged).
"""
from decimal import Decimal, ROUND_HALF_UP

SUPPORTED_CURRENCIES = [
    {'code': 'USD', 'symbol': '$', 'name': 'US Dollar'},
    {'code': 'AED', 'symbol': 'د.إ', 'name': 'UAE Dirham'},
    {'code': 'INR', 'symbol': '₹', 'name': 'Indian Rupee'},
    {'code': 'PKR', 'symbol': '₨', 'name': 'Pakistani Rupee'},
    {'code': 'AUD', 'symbol': 'A$', 'name': 'Australian Dollar'},
    {'code': 'EUR', 'symbol': '€', 'name': 'Euro'},
    {'code': 'GBP', 'symbol': '£', 'name': 'British Pound'},
    {'code': 'CAD', 'symbol': 'C$', 'name': 'Canadian Dollar'},
    {'code': 'OMR', 'symbol': 'ر.ع.', 'name': 'Omani Rial'},
    {'code': 'QAR', 'symbol': 'ر.ق', 'name': 'Qatari Riyal'},
]

EXCHANGE_RATES = {
    'USD': Decimal('1.0'),
    'AED': Decimal('3.67'),
    'INR': Decimal('83.25'),
    'PKR': Decimal('278.50'),
    'AUD': Decimal('1.52'),
    'EUR': Decimal('0.92'),
    'GBP': Decimal('0.79'),
    'CAD': Decimal('1.36'),
    'OMR': Decimal('0.38'),
    'QAR': Decimal('3.64'),
}

# Currencies minted in thousandths (1 rial = 1000 baisa)
THOUSANDTHS_CURRENCIES = {'OMR', 'BHD', 'KWD'}

_CENTS = Decimal('0.01')


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal('0')
    return Decimal(str(value))


def get_rate(currency_code):
    return EXCHANGE_RATES.get((currency_code or 'USD').upper(), Decimal('1'))


def to_usd(amount, currency_code):
    """Convert ``amount`` in ``currency_code`` to US dollars."""
    return _to_decimal(amount) / get_rate(currency_code)


def from_usd(amount_usd, currency_code):
    """Convert a US dollar amount into ``currency_code``."""
    return _to_decimal(amount_usd) * get_rate(currency_code)


def to_usd_cents(amount, currency_code):
    """USD amount rounded to cents, ready for a Numeric(12, 2) column."""
    return to_usd(amount, currency_code).quantize(_CENTS, rounding=ROUND_HALF_UP)


def currency_symbol(currency_code):
    for info in SUPPORTED_CURRENCIES:
        if info['code'] == currency_code:
            return info['symbol']
    return '$'


def format_currency(amount, currency_code='USD'):
    """Render ``amount`` like ``1,234.5 $``.

    Trailing zeros are dropped, so whole amounts show no decimals. At most
    three decimals are shown for thousandths currencies and two otherwise.
    """
    places = 3 if currency_code in THOUSANDTHS_CURRENCIES else 2
    value = _to_decimal(amount).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    text = f"{value:,.{places}f}".rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return f"{text} {currency_symbol(currency_code)}"


def list_currencies():
    return [
        dict(info, rate=float(EXCHANGE_RATES[info['code']]))
        for info in SUPPORTED_CURRENCIES
    ]
