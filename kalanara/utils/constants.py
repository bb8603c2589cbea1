"""
Constantes globales pour Kalanara.

Ce module contient :
- L'alphabet et le prefixe des codes (vouchers, commandes Midtrans)
- Les coordonnees du spa reprises dans les messages envoyes aux clients
- Les noms de mois anglais (formatage de date independant de la locale)
"""

import string

# Alphabet des codes : majuscules + chiffres, saisissable a la main
CODE_ALPHABET = string.ascii_uppercase + string.digits

# Prefixe des identifiants de commande envoyes a Midtrans
PAYMENT_ORDER_PREFIX = "KSP"
PAYMENT_ORDER_SUFFIX_LENGTH = 6

# Coordonnees du spa
SPA_NAME = "KALANARA SPA"
SPA_TAGLINE = "Harmony in Every Touch"
SPA_ADDRESS = "Jl. Raya Ubud No. 88, Ubud, Bali 80571"
SPA_PHONE = "+62 361 123 4567"
SPA_EMAIL = "hello@kalanaraspa.com"

# Prefixe telephonique par defaut (numeros locaux commencant par 0)
DEFAULT_COUNTRY_CODE = "62"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
