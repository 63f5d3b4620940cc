# -*- coding: utf-8 -*-

"""
Launch DD Switch from a source checkout: ``python run.py``.
"""

from dd_switch.run import main

if __name__ == '__main__':
    main()
