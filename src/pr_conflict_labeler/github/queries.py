"""
GraphQL documents and response decoding.

The documents are sent verbatim; field selections must stay in sync with
the response models in ``models.responses``.
"""

from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError

from .client import ResponseShapeError


PULL_REQUEST_FILES_PAGE_SIZE = 300


PULL_REQUEST_PAGE_QUERY = """query ($owner: String!, $repo: String!, $after: String) {
  repository(owner: $owner, name: $repo) {
    pullRequests(first: 100, states: OPEN, after: $after) {
      edges {
        node {
          id
          number
          author {
            login
          }
          mergeable
          potentialMergeCommit {
            oid
          }
          labels(first: 100) {
            edges {
              node {
                id
                name
              }
            }
          }
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}"""


PULL_REQUEST_QUERY = """query ($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      id
      number
      author {
        login
      }
      mergeable
      potentialMergeCommit {
        oid
      }
      labels(first: 100) {
        edges {
          node {
            id
            name
          }
        }
      }
    }
  }
}"""


LABEL_SEARCH_QUERY = """query ($owner: String!, $repo: String!, $labelName: String!) {
  repository(owner: $owner, name: $repo) {
    labels(first: 10, query: $labelName) {
      edges {
        node {
          id
          name
        }
      }
    }
  }
}"""


ADD_LABEL_MUTATION = """mutation ($label: ID!, $pullRequest: ID!) {
  addLabelsToLabelable(input: {labelIds: [$label], labelableId: $pullRequest}) {
    clientMutationId
  }
}"""


ADD_COMMENT_MUTATION = """mutation comment($id: ID!, $body: String!) {
  addComment(input: {subjectId: $id, body: $body}) {
    clientMutationId
  }
}"""


REMOVE_LABEL_MUTATION = """mutation ($label: ID!, $pullRequest: ID!) {
  removeLabelsFromLabelable(input: {labelIds: [$label], labelableId: $pullRequest}) {
    clientMutationId
  }
}"""


ModelT = TypeVar('ModelT', bound=BaseModel)


def decode_response(model: Type[ModelT], payload: Any, what: str) -> ModelT:
    """
    Validate ``payload`` against ``model``.

    Raises:
        ResponseShapeError: naming ``what`` and the first missing/invalid field
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = '.'.join(str(part) for part in first['loc'])
        raise ResponseShapeError(
            f"Unexpected {what} response: {location}: {first['msg']}",
            response_data=payload if isinstance(payload, dict) else None,
        ) from e
