"""Request building and response parsing for US address APIs."""

__version__ = "1.15.4"

__all__ = [
    "autocomplete_pro",
    "credentials",
    "extract",
    "reverse_geo",
    "street",
    "street_client",
    "zipcode",
    "zipcode_client",
]