"""Donor eligibility: a donor may give blood again a fixed number of
calendar months after the last donation (three by default).

Month arithmetic goes through pandas' DateOffset, which clips to the end of
shorter months: a donation on 31 January becomes eligible on 30 April.
"""
import pandas as pd
from django.conf import settings
from django.utils import timezone


def eligible_from(last_donation_date, now=None):
    if last_donation_date is None:
        return now or timezone.now()
    offset = pd.DateOffset(months=settings.RAKTSETU_ELIGIBILITY_MONTHS)
    return (pd.Timestamp(last_donation_date) + offset).to_pydatetime()


def is_eligible(last_donation_date, now=None):
    now = now or timezone.now()
    return now >= eligible_from(last_donation_date, now)
