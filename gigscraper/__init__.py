"""Walk gig categories in a running Chrome over DevTools and log the details of unscraped gigs."""

__version__ = "0.1.0"