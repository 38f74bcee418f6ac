from bs4 import BeautifulSoup

# Listing pages carry their JSON-LD payload in the second-to-last <script>;
# the last one is site boilerplate.
SCRIPT_OFFSET_FROM_END = 2


def extract_script_at_offset(markup: str, offset: int) -> str:
    """Return the text of the ``offset``-th <script> counted from the end, or ""."""
    if not markup or offset < 1:
        return ""

    soup = BeautifulSoup(markup, "html.parser")
    scripts = soup.find_all("script")
    if len(scripts) < offset:
        return ""

    return scripts[-offset].string or ""


def extract_second_last_script(markup: str) -> str:
    return extract_script_at_offset(markup, SCRIPT_OFFSET_FROM_END)
