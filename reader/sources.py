"""Default news sources for the daily strategy summary."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedSource:
    """An RSS feed and the publication name used for attribution."""
    url: str
    source: str


EDITORIAL_FEEDS = [
    # Core marketing
    FeedSource('https://www.marketingdive.com/feeds/news', 'Marketing Dive'),
    FeedSource('https://www.campaignlive.co.uk/rss/latest', 'Campaign Live'),

    # Branding & campaigns
    FeedSource('https://www.adweek.com/feed/', 'Adweek'),
    FeedSource('https://www.moreaboutadvertising.com/feed/', 'More About Advertising'),
    FeedSource('http://feeds.feedburner.com/Adpulp', 'AdPulp'),

    # Ad technology
    FeedSource('https://www.adexchanger.com/feed/', 'AdExchanger'),
    FeedSource('https://www.adtechdaily.com/feed/', 'Ad Tech Daily'),
    FeedSource('https://www.videoweek.com/feed/', 'VideoWeek'),
    FeedSource('https://advertisemint.com/feed/', 'AdvertiseMint'),
    FeedSource('https://www.ipglab.com/feed/', 'IPG Media Lab'),
    FeedSource('https://www.silverpush.co/blog/feed/', 'SilverPush'),

    # Fintech / enterprise
    FeedSource('https://www.ciodive.com/feeds/news/', 'CIO Dive'),
    FeedSource('https://www.bankingdive.com/feeds/news/', 'Banking Dive'),

    # Tech & culture
    FeedSource('https://www.wired.com/feed/rss', 'Wired'),
    FeedSource('https://www.fastcompany.com/rss', 'Fast Company'),
]

REDDIT_FEEDS = [
    FeedSource('https://www.reddit.com/r/marketing.rss', 'r/marketing'),
    FeedSource('https://www.reddit.com/r/advertising.rss', 'r/advertising'),
    FeedSource('https://www.reddit.com/r/tech.rss', 'r/tech'),
    FeedSource('https://www.reddit.com/r/Fintech.rss', 'r/fintech'),
    FeedSource('https://www.reddit.com/r/userexperience.rss', 'r/userexperience'),
]

DEFAULT_FEEDS = EDITORIAL_FEEDS + REDDIT_FEEDS
