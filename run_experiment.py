#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Run the IMDb sentiment model comparison from the project root.

    python run_experiment.py --train data/imdb_train --test data/imdb_test
    python run_experiment.py --config configs/example.json --compute-context distributed
"""

from sentiment_compare.cli import main

if __name__ == "__main__":
    main()
