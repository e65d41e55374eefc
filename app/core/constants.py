"""Application constants."""

# Password policy (registration)
MIN_PASSWORD_LENGTH = 6

# Report: average workouts per week never divides by less than one week
MIN_REPORT_WEEKS = 1.0
SECONDS_PER_WEEK = 7 * 24 * 60 * 60
