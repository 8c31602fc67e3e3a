# XML converted to JSON (@_ attributes, #text nodes).
# /api/listings?company=<slug>&limit=10&responseFormat=json
from casagateway.handler import make_handler

handler = make_handler("listings")
