"""
Rating gRPC Service Implementation.

Implements RatingServicer from proto/rating_pb2_grpc.py on top of
RatingClient. Ratings are created through role-specific procedures
(requestor rated / provider rated); everything else is a table operation.
"""

import logging
from typing import Optional

from backend.client import ClientError
from backend.rating import RatingClient
from proto import rating_pb2, status
from proto.rating_pb2_grpc import RatingServicer

logger = logging.getLogger(__name__)

PROTECTED_COLUMNS = frozenset({"id", "request_id", "author", "rating_for"})
RATING_ROLES = frozenset({rating_pb2.RATING_FOR_REQUESTOR, rating_pb2.RATING_FOR_PROVIDER})


def _valid_new_rating(rating: Optional[rating_pb2.NewRatingData]) -> bool:
    return rating is not None and bool(rating.request_id) and bool(rating.author)


class RatingServiceImpl(RatingServicer):
    """Production implementation of the Rating gRPC service."""

    def __init__(self, client: Optional[RatingClient] = None) -> None:
        self.client = client or RatingClient()

    def CreateForRequestor(self, request: rating_pb2.CreateRequest, context) -> rating_pb2.CreateResponse:
        if not _valid_new_rating(request.rating):
            return status.invalid_argument(context, rating_pb2.CreateResponse())
        try:
            rating = self.client.create_for_requestor(request.rating)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.CreateResponse())

        logger.info(
            "[RatingService] Requestor rated: request=%s author=%s value=%s",
            rating.request_id,
            rating.author,
            rating.value,
        )
        return rating_pb2.CreateResponse(rating=rating)

    def CreateForProvider(self, request: rating_pb2.CreateRequest, context) -> rating_pb2.CreateResponse:
        if not _valid_new_rating(request.rating):
            return status.invalid_argument(context, rating_pb2.CreateResponse())
        try:
            rating = self.client.create_for_provider(request.rating)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.CreateResponse())

        logger.info(
            "[RatingService] Provider rated: request=%s author=%s value=%s",
            rating.request_id,
            rating.author,
            rating.value,
        )
        return rating_pb2.CreateResponse(rating=rating)

    def Get(self, request: rating_pb2.GetRequest, context) -> rating_pb2.GetResponse:
        if not request.key or not request.value:
            return status.invalid_argument(context, rating_pb2.GetResponse())
        try:
            ratings = self.client.get(request.key, request.value)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.GetResponse())
        return rating_pb2.GetResponse(ratings=ratings)

    def GetById(self, request: rating_pb2.GetByIdRequest, context) -> rating_pb2.GetByIdResponse:
        """Look up the rating of one role on one request."""
        if not request.request_id or request.rating_for not in RATING_ROLES:
            return status.invalid_argument(context, rating_pb2.GetByIdResponse())
        try:
            rating = self.client.get_by_id(request.request_id, request.rating_for)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.GetByIdResponse())
        if rating is None:
            return status.not_found(context, rating_pb2.GetByIdResponse())
        return rating_pb2.GetByIdResponse(rating=rating)

    def GetForRequest(
        self, request: rating_pb2.GetForRequestRequest, context
    ) -> rating_pb2.GetForRequestResponse:
        if not request.request_id:
            return status.invalid_argument(context, rating_pb2.GetForRequestResponse())
        try:
            ratings = self.client.get_for_request(request.request_id)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.GetForRequestResponse())
        return rating_pb2.GetForRequestResponse(ratings=ratings)

    def Update(self, request: rating_pb2.UpdateRequest, context) -> rating_pb2.UpdateResponse:
        patch = status.decode_patch(request.body, PROTECTED_COLUMNS)
        if not request.rating_id or patch is None:
            return status.invalid_argument(context, rating_pb2.UpdateResponse())
        try:
            rating = self.client.update(request.rating_id, patch)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.UpdateResponse())
        return rating_pb2.UpdateResponse(rating=rating)

    def Delete(self, request: rating_pb2.DeleteRequest, context) -> rating_pb2.DeleteResponse:
        if not request.rating_id:
            return status.invalid_argument(context, rating_pb2.DeleteResponse())
        try:
            self.client.delete(request.rating_id)
        except ClientError as exc:
            return status.client_error(context, exc, rating_pb2.DeleteResponse())

        logger.info("[RatingService] Deleted rating: id=%s", request.rating_id)
        return rating_pb2.DeleteResponse()
