# Raw SwissRETS XML passthrough: /api/properties?company=<slug>
from casagateway.handler import make_handler

handler = make_handler("properties")
