"""Built-in data-vocabulary.org vocabularies.

These cover the common rich-snippet types. Property names follow the
data-vocabulary.org definitions; none of them declares a fallback, so
undeclared properties are dropped.
"""

from __future__ import annotations

from typing import List

from ..datatypes import URL, ISO8601Date, Number, Text
from .registry import VocabularyRegistry
from .schema import Vocabulary, define_vocabulary, has_many, has_one

DV = "http://data-vocabulary.org/"

ADDRESS_ID = DV + "Address"
GEO_ID = DV + "Geo"
PERSON_ID = DV + "Person"
ORGANIZATION_ID = DV + "Organization"
RATING_ID = DV + "Rating"
REVIEW_ID = DV + "Review"
OFFER_ID = DV + "Offer"
PRODUCT_ID = DV + "Product"
EVENT_ID = DV + "Event"

Address = define_vocabulary(
    ADDRESS_ID,
    properties={
        "street-address": has_one(),
        "locality": has_one(),
        "region": has_one(),
        "postal-code": has_one(),
        "country-name": has_one(),
    },
)

Geo = define_vocabulary(
    GEO_ID,
    properties={
        "latitude": has_one(Number),
        "longitude": has_one(Number),
    },
)

Person = define_vocabulary(
    PERSON_ID,
    properties={
        "name": has_one(),
        "nickname": has_many(),
        "photo": has_one(URL),
        "title": has_one(),
        "role": has_one(),
        "url": has_one(URL),
        "affiliation": has_many(ORGANIZATION_ID, Text),
        "address": has_one(ADDRESS_ID, Text),
        "friend": has_many(PERSON_ID, Text),
        "contact": has_many(PERSON_ID, Text),
        "acquaintance": has_many(PERSON_ID, Text),
    },
)

Organization = define_vocabulary(
    ORGANIZATION_ID,
    properties={
        "name": has_one(),
        "url": has_one(URL),
        "address": has_one(ADDRESS_ID, Text),
        "tel": has_many(),
        "geo": has_one(GEO_ID),
    },
)

Rating = define_vocabulary(
    RATING_ID,
    properties={
        "value": has_one(Number),
        "best": has_one(Number),
        "worst": has_one(Number),
    },
)

Review = define_vocabulary(
    REVIEW_ID,
    properties={
        "itemreviewed": has_one(),
        "reviewer": has_one(PERSON_ID, Text),
        "dtreviewed": has_one(ISO8601Date),
        "summary": has_one(),
        "description": has_one(),
        "rating": has_one(RATING_ID, Number),
    },
)

Offer = define_vocabulary(
    OFFER_ID,
    properties={
        "price": has_one(Number),
        "currency": has_one(),
        "priceValidUntil": has_one(ISO8601Date),
        "seller": has_one(PERSON_ID, ORGANIZATION_ID, Text),
        "condition": has_one(),
        "availability": has_one(),
    },
)

Product = define_vocabulary(
    PRODUCT_ID,
    properties={
        "name": has_one(),
        "image": has_many(URL),
        "description": has_one(),
        "brand": has_one(),
        "category": has_one(),
        "identifier": has_many(),
        "review": has_many(REVIEW_ID),
        "offerdetails": has_many(OFFER_ID),
    },
)

Event = define_vocabulary(
    EVENT_ID,
    properties={
        "summary": has_one(),
        "url": has_one(URL),
        "location": has_one(ORGANIZATION_ID, ADDRESS_ID, Text),
        "description": has_one(),
        "startDate": has_one(ISO8601Date),
        "endDate": has_one(ISO8601Date),
        "eventType": has_many(),
        "photo": has_many(URL),
        "geo": has_one(GEO_ID),
    },
)


def builtin_vocabularies() -> List[Vocabulary]:
    return [Address, Geo, Person, Organization, Rating, Review, Offer, Product, Event]


def load_builtin_vocabularies(registry: VocabularyRegistry) -> None:
    """Register the data-vocabulary.org set into `registry`."""
    registry.register_all(builtin_vocabularies())
