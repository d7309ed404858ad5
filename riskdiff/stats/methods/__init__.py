"""
Statistical methods for comparing two binomial proportions.

These methods define the statistical behaviour independently of how a
trial hypothesis is framed:

- `score_test`: restricted-MLE score tests (Farrington-Manning,
  Miettinen-Nurminen) and test-inverted confidence intervals
- `common`: closed-form utilities (Wald, Wilson, Newcombe)
"""
