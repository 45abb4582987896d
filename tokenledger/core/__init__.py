# tokenledger/core/__init__.py
