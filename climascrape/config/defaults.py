"""Default source page and request headers for the Climatempo 15-day scrape."""

DEFAULT_URL = (
    "https://www.climatempo.com.br/previsao-do-tempo/15-dias/cidade/4598/forquilhinha-sc"
)
DEFAULT_CITY = "Forquilhinha"
DEFAULT_STATE = "SC"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/129.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/avif,image/webp,*/*;q=0.8"
)
DEFAULT_ACCEPT_LANGUAGE = "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7"
# Site shows a consent wall without it
DEFAULT_COOKIE = "cookie_consent=true"
