"""
Trial schemes built on the statistical methods.

- `two_proportions`: control vs treatment binomial arms, risk difference
"""
