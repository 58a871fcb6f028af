"""Turn extracted tags and computed scores into ordered SEO advice.

Items are emitted in a fixed order: meta issues, social issues, technical,
then an overall summary. The meta and social groups are only evaluated while
their category score is below the well-optimized threshold.
"""

from models import Recommendation, ScoreRecord, TagMapping
from scoring import (
    DESCRIPTION_LENGTH_RANGE,
    DESCRIPTION_OPTIMAL_POINTS,
    DESCRIPTION_PRESENT_POINTS,
    LOW_SCORE_THRESHOLD,
    SOCIAL_TAG_POINTS,
    TECHNICAL_REVIEW_THRESHOLD,
    TITLE_LENGTH_RANGE,
    TITLE_OPTIMAL_POINTS,
    TITLE_PRESENT_POINTS,
    TWITTER_CARD_POINTS,
    VIEWPORT_POINTS,
    WELL_OPTIMIZED_THRESHOLD,
    has_tag,
    length_in_range,
    tag_value,
)

TITLE_CODE = "<title>Your Page Title Here</title>"
DESCRIPTION_CODE = (
    '<meta name="description" content="Your compelling page description here (120-160 characters)">'
)
VIEWPORT_CODE = '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
TWITTER_CARD_CODE = "\n".join(
    [
        '<meta name="twitter:card" content="summary_large_image">',
        '<meta name="twitter:title" content="Your compelling title">',
        '<meta name="twitter:description" content="Your page description">',
        '<meta name="twitter:image" content="https://example.com/social-image.jpg">',
    ]
)

# (tag, title, description lead, code) in emission order
OPEN_GRAPH_ADVICE: list[tuple[str, str, str, str]] = [
    (
        "og:title",
        "Add Open Graph Title",
        "Add an og:title tag to control the headline shown when your page is shared",
        '<meta property="og:title" content="Your compelling title">',
    ),
    (
        "og:description",
        "Add Open Graph Description",
        "Add an og:description tag to control the summary shown in social previews",
        '<meta property="og:description" content="Your page description">',
    ),
    (
        "og:image",
        "Add Open Graph Image",
        "Add an og:image tag so shared links display a preview image",
        '<meta property="og:image" content="https://example.com/social-image.jpg">',
    ),
    (
        "og:url",
        "Add Open Graph URL",
        "Add an og:url tag so shares always point at the canonical address of this page",
        '<meta property="og:url" content="https://yourwebsite.com/current-page">',
    ),
]


def _item(kind: str, title: str, description: str, code: str | None = None) -> Recommendation:
    item: Recommendation = {"type": kind, "title": title, "description": description}
    if code is not None:
        item["code"] = code
    return item


def _meta_recommendations(meta_tags: TagMapping | None, meta_score: int) -> list[Recommendation]:
    out: list[Recommendation] = []

    title = tag_value(meta_tags, "title")
    low, high = TITLE_LENGTH_RANGE
    if not title:
        out.append(
            _item(
                "error",
                "Missing Title Tag",
                f"Your meta score is {meta_score}/100 and the page has no title tag. "
                f"Add a descriptive title of {low}-{high} characters to gain up to "
                f"{TITLE_OPTIMAL_POINTS} points and improve search engine visibility.",
                TITLE_CODE,
            )
        )
    elif not length_in_range(title, TITLE_LENGTH_RANGE):
        gain = TITLE_OPTIMAL_POINTS - TITLE_PRESENT_POINTS
        out.append(
            _item(
                "warning",
                "Optimize Title Length",
                f"Your title is {len(title)} characters long. Keep it between {low}-{high} "
                f"characters for optimal display in search results (+{gain} points).",
            )
        )

    description = tag_value(meta_tags, "description")
    low, high = DESCRIPTION_LENGTH_RANGE
    if not description:
        out.append(
            _item(
                "error",
                "Missing Meta Description",
                "Add a meta description to improve click-through rates from search results. "
                f"A {low}-{high} character description adds up to "
                f"{DESCRIPTION_OPTIMAL_POINTS} points.",
                DESCRIPTION_CODE,
            )
        )
    elif not length_in_range(description, DESCRIPTION_LENGTH_RANGE):
        gain = DESCRIPTION_OPTIMAL_POINTS - DESCRIPTION_PRESENT_POINTS
        out.append(
            _item(
                "warning",
                "Optimize Description Length",
                f"Your meta description is {len(description)} characters long. Keep it between "
                f"{low}-{high} characters so it is not truncated (+{gain} points).",
            )
        )

    if not has_tag(meta_tags, "viewport"):
        out.append(
            _item(
                "warning",
                "Add Viewport Meta Tag",
                "Add a viewport meta tag so the page renders correctly on mobile devices "
                f"(+{VIEWPORT_POINTS} points).",
                VIEWPORT_CODE,
            )
        )

    return out


def _social_recommendations(
    og_tags: TagMapping | None, twitter_tags: TagMapping | None
) -> list[Recommendation]:
    out: list[Recommendation] = []

    for key, title, lead, code in OPEN_GRAPH_ADVICE:
        if not has_tag(og_tags, key):
            out.append(_item("warning", title, f"{lead} (+{SOCIAL_TAG_POINTS[key]} points).", code))

    if not has_tag(twitter_tags, "twitter:card"):
        out.append(
            _item(
                "error",
                "Implement Twitter Cards",
                "Add Twitter Card meta tags to control how your content appears when shared "
                f"on Twitter (+{TWITTER_CARD_POINTS} points).",
                TWITTER_CARD_CODE,
            )
        )

    if not has_tag(twitter_tags, "twitter:image") and not has_tag(og_tags, "og:image"):
        out.append(
            _item(
                "warning",
                "Add a Social Sharing Image",
                "Neither twitter:image nor og:image is set, so shared links will appear "
                "without a preview image.",
            )
        )

    return out


def _overall_recommendations(scores: ScoreRecord) -> list[Recommendation]:
    overall = scores["overall"]
    out: list[Recommendation] = []

    if overall < LOW_SCORE_THRESHOLD:
        out.append(
            _item(
                "error",
                "Low Overall SEO Score",
                f"Your overall SEO score is {overall}/100. Fix the issues above, starting "
                "with the errors, to bring the page up to a healthy level.",
            )
        )
    elif overall < WELL_OPTIMIZED_THRESHOLD:
        out.append(
            _item(
                "warning",
                "Room for Improvement",
                f"Your overall SEO score is {overall}/100. Addressing the warnings above "
                f"should push it past {WELL_OPTIMIZED_THRESHOLD}.",
            )
        )

    if (
        overall >= WELL_OPTIMIZED_THRESHOLD
        and scores["meta"] >= WELL_OPTIMIZED_THRESHOLD
        and scores["social"] >= WELL_OPTIMIZED_THRESHOLD
    ):
        out.append(
            _item(
                "success",
                "SEO Well Optimized",
                f"Your page scores {overall}/100 with proper meta tags and social media tags "
                "in place.",
            )
        )

    return out


def generate_recommendations(
    meta_tags: TagMapping | None,
    og_tags: TagMapping | None,
    twitter_tags: TagMapping | None,
    scores: ScoreRecord,
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    if scores["meta"] < WELL_OPTIMIZED_THRESHOLD:
        recommendations.extend(_meta_recommendations(meta_tags, scores["meta"]))

    if scores["social"] < WELL_OPTIMIZED_THRESHOLD:
        recommendations.extend(_social_recommendations(og_tags, twitter_tags))

    if scores["technical"] < TECHNICAL_REVIEW_THRESHOLD:
        recommendations.append(
            _item(
                "warning",
                "Improve Technical SEO",
                "Review page speed, add structured data and check the mobile experience "
                "to strengthen the technical foundation of the page.",
            )
        )

    recommendations.extend(_overall_recommendations(scores))

    if not recommendations:
        recommendations.append(
            _item(
                "success",
                "SEO Well Optimized",
                "Your page has good SEO optimization with proper meta tags and social media tags.",
            )
        )

    return recommendations
