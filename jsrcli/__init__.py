"""jsr-cli: install and publish JSR packages with npm, yarn, pnpm or bun."""

__version__ = "0.13.2"
