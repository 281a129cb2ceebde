"""
Run demoapp with ``python -m demoapp``.
"""

from demoapp.main import main

main()
