"""Settings package for the storage rental service.

`base.py` holds the configuration shared by every environment; `dev.py`,
`prod.py` and `test.py` override it for their environment.
"""
