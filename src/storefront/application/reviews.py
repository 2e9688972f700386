"""Application services: product reviews.

Reviews are stored unapproved and only appear on the storefront once an
admin approves them.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.catalog import Review
from storefront.domain.repository.catalog_repository import ReviewRepository


class SubmitReviewHandler:

    def __init__(self, review_repo: ReviewRepository) -> None:
        self._review_repo = review_repo

    def handle(
        self,
        product_id: str,
        name: str,
        rating: int,
        text: str,
        user_id: str | None = None,
        order_id: str | None = None,
    ) -> Review:
        review = Review.submit(
            product_id=product_id,
            name=name,
            rating=rating,
            text=text,
            user_id=user_id,
            order_id=order_id,
        )
        self._review_repo.save(review)
        return review


class ApproveReviewHandler:

    def __init__(self, review_repo: ReviewRepository) -> None:
        self._review_repo = review_repo

    def handle(self, review_id: str) -> None:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review '{review_id}' not found")
        review.approve()
        self._review_repo.save(review)


class ListProductReviewsHandler:

    def __init__(self, review_repo: ReviewRepository) -> None:
        self._review_repo = review_repo

    def handle(self, product_id: str, approved_only: bool = True) -> list[Review]:
        return self._review_repo.list_for_product(product_id, approved_only)
