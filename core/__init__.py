"""
Student Outcome Engine.

Feature normalization, logistic scoring, isotonic calibration and linear
attribution for the graduate/dropout classifiers.
"""
