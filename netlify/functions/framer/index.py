# JSON for the Framer site (plain attribute names, "value" text nodes).
# Extra flags: flattenImages=true, simplifyImages=true
from casagateway.handler import make_handler

handler = make_handler("framer")
