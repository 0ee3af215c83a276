"""aws-sso-login -- drive the AWS SSO device-code login through a browser.

The ``aws sso login --no-browser`` command prints a verification URL and
waits until that URL is approved in a browser. This package watches the
command's output, opens the URL in a Playwright-controlled Chromium with a
persistent profile, and walks the identity provider's login pages so the
user only has to type credentials and approve the MFA prompt.

Typical workflow::

    aws-sso-login                  # pick an sso-session interactively
    aws-sso-login -p corp --gui    # log in to "corp" with a visible browser

Modules:
    app: Typer application and CLI entry point.
    launcher: Runs ``aws sso login`` and extracts the verification URL.
    router: Page classification loop driving the provider's login pages.
    providers: Identity-provider strategies (Microsoft Entra ID).
    browser: Browser tab interface and the Playwright session manager.
    portal: AWS device-authorization portal screens.
    config: XDG-aware settings and AWS config discovery.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.3.0"
