"""Try-on functions service.

Two HTTP functions proxy third-party image generation: ``fashnTryOn``
(garments, FASHN) and ``kieTryOn`` (jewelry, KIE). Each submits an
asynchronous job and polls it with a bounded, fixed-interval loop.
"""
