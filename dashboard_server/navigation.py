from typing import NoReturn

DASHBOARD_PATH = "/dashboard"
INVOICES_PATH = "/dashboard/invoices"


class Redirect(Exception):
    """Ends the current handler and sends the browser to `url`.

    Raised by `redirect()` and turned into a RedirectResponse by the
    exception handler registered in `main`. 303 makes the browser follow a
    form POST with a GET.
    """

    def __init__(self, url: str, status_code: int = 303):
        super().__init__(url)
        self.url = url
        self.status_code = status_code


def redirect(url: str) -> NoReturn:
    raise Redirect(url)
