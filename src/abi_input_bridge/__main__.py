"""Module entry point for `python -m abi_input_bridge`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
