# tokenledger/__init__.py
