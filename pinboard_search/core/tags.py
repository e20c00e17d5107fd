import logging
from collections.abc import Mapping, Sequence

from pinboard_search.types import TagCount


def tags_like(
    vocabulary: Mapping[str, int], queries: Sequence[str] = ()
) -> list[TagCount]:
    """Return vocabulary tags containing any of ``queries``, most used first.

    Matching is a case-insensitive substring test. A tag matching several
    queries is listed once per matching query; callers that want unique
    tags must deduplicate themselves. Without queries every tag is returned.
    """
    if not queries:
        matches = [TagCount(tag, count) for tag, count in vocabulary.items()]
    else:
        folded_queries = [query.casefold() for query in queries]
        matches = []
        for tag, count in vocabulary.items():
            folded_tag = tag.casefold()
            for query in folded_queries:
                if query in folded_tag:
                    matches.append(TagCount(tag, count))
        logging.debug("Matched %d of %d tags", len(matches), len(vocabulary))

    matches.sort(key=lambda item: item.count, reverse=True)
    return matches
