"""Fixed generator layout and starter defaults."""

SUPPORTED_PACKAGE_MANAGERS: tuple[str, ...] = ("bun", "npm", "pnpm", "yarn")

SCAFFOLD_DIR = "scaffold"
OVERLAY_EXAMPLES_DIR = "overlays/examples"

# Canonical layering order; later overlays win on path collisions.
EXAMPLE_OVERLAY_ORDER: tuple[str, ...] = ("aave", "lido", "uniswap")
SUPPORTED_EXAMPLE_SELECTIONS: tuple[str, ...] = ("none", *EXAMPLE_OVERLAY_ORDER, "all")

TEMPLATE_COPY_ENTRIES: tuple[str, ...] = (
    ".solhint.json",
    "gitignore",
    "Makefile",
    "README.md",
    "contracts",
    "scripts",
)

# Copied under a different name (packaging layers drop dotfiles)
RENAMED_COPY_ENTRIES: dict[str, str] = {"gitignore": ".gitignore"}

PLACEHOLDER_TEXT_FILES: tuple[str, ...] = ("README.md",)

STARTER_PACKAGE_JSON_BASE: dict = {
    "private": True,
    "version": "0.1.0",
    "description": "Protocol-agnostic starter for Aztec privacy integrations",
    "license": "MIT",
    "scripts": {
        "fmt": "make fmt",
        "fmt:check": "make fmt-check",
        "lint": "make lint",
        "test": "make test",
    },
    "devDependencies": {
        "solhint": "^6.0.3",
    },
}

INSTALL_COMMANDS: dict[str, str] = {
    "bun": "bun install",
    "npm": "npm install",
    "pnpm": "pnpm install",
    "yarn": "yarn install",
}

USER_AGENT = "create-aztec-privacy-template"
ARCHIVE_URL_TEMPLATE = "https://codeload.github.com/{owner}/{repo}/tar.gz/{ref}"
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_DELAY_MS = 400
DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0
