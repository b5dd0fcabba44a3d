"""Mixed workload scenario.

Weights model a marketplace where most traffic is anonymous browsing,
a fair share is buyers checking out and a little is sellers onboarding.
This is the recommended scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.browsing import CatalogueBrowsing
from loadtests.scenarios.shopping import BuyerCheckoutJourney, SellerOnboardingJourney


class MixedWorkloadUser(HttpUser):
    """Browsing (60%), checkout (32%), seller onboarding (8%)."""

    tasks = {
        CatalogueBrowsing: 15,
        BuyerCheckoutJourney: 8,
        SellerOnboardingJourney: 2,
    }
    wait_time = between(0.5, 3)
