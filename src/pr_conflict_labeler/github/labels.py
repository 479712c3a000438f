"""
Label lookup and labelable mutations.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..models.pull_request import Label, LabelableRef, RepoContext
from ..models.responses import LabelSearchResponse
from .queries import (
    ADD_COMMENT_MUTATION,
    ADD_LABEL_MUTATION,
    LABEL_SEARCH_QUERY,
    REMOVE_LABEL_MUTATION,
    decode_response,
)


logger = logging.getLogger(__name__)


def fetch_labels(client, repo: RepoContext, name_pattern: str) -> List[Label]:
    """
    Search repository labels whose name contains ``name_pattern``.

    At most 10 labels are returned, in server order. Several labels may
    match; see ``find_label`` for exact-name selection.
    """
    data = client.graphql(LABEL_SEARCH_QUERY, {
        'owner': repo.owner,
        'repo': repo.repo,
        'labelName': name_pattern,
    })
    response = decode_response(LabelSearchResponse, data, 'label search')
    labels = response.repository.labels.to_labels()
    logger.debug(f"Label search '{name_pattern}' on {repo.full_name} matched {len(labels)} label(s)")
    return labels


def find_label(labels: Sequence[Label], name: str) -> Optional[Label]:
    """Return the first label named exactly ``name``."""
    for label in labels:
        if label.name == name:
            return label
    return None


def add_label(client, labelable: LabelableRef) -> Dict[str, Any]:
    logger.info(f"Adding label {labelable.label_id} to {labelable.labelable_id}")
    return client.graphql(ADD_LABEL_MUTATION, {
        'label': labelable.label_id,
        'pullRequest': labelable.labelable_id,
    })


def add_comment(client, subject_id: str, body: str) -> Dict[str, Any]:
    logger.info(f"Commenting on {subject_id}")
    return client.graphql(ADD_COMMENT_MUTATION, {'id': subject_id, 'body': body})


def remove_label(client, labelable: LabelableRef) -> Dict[str, Any]:
    """Remove a label from a pull request or issue. Sends no notification."""
    logger.info(f"Removing label {labelable.label_id} from {labelable.labelable_id}")
    return client.graphql(REMOVE_LABEL_MUTATION, {
        'label': labelable.label_id,
        'pullRequest': labelable.labelable_id,
    })
