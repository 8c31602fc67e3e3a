"""
Shared fixtures: a small SwissRETS export and a fully populated config.
"""
from unittest.mock import MagicMock

import pytest

from casagateway.config import GatewayConfig

ENDPOINT = "https://casagateway.test/rest/publisher-properties"

SINGLE_PROPERTY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<export xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <properties>
    <property id="1001" published="true">
      <referenceId>REF-1</referenceId>
      <zip>0041</zip>
      <localizations>
        <localization lang="de">
          <title>  Attika mit Seesicht  </title>
          <attachments>
            <image><url>https://img.test/1-de-a.jpg</url><title>Wohnen</title></image>
            <image><url>https://img.test/1-de-b.jpg</url></image>
          </attachments>
        </localization>
        <localization lang="fr">
          <attachments>
            <image><url>https://img.test/1-fr-a.jpg</url></image>
            <image><url>https://img.test/1-fr-b.jpg</url></image>
          </attachments>
        </localization>
      </localizations>
    </property>
  </properties>
</export>
"""

TWO_PROPERTIES_XML = """<export>
  <properties>
    <property id="1"><referenceId>A</referenceId></property>
    <property id="2"><referenceId>B</referenceId></property>
  </properties>
</export>
"""


@pytest.fixture
def config():
    return GatewayConfig(
        api_key="public-key",
        private_key="private-key",
        endpoint=ENDPOINT,
        default_provider="fallback-agency",
        timeout=None,
        log_level="INFO",
    )


def make_response(status=200, text=SINGLE_PROPERTY_XML, content_type="application/xml; charset=utf-8",
                  reason="OK"):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status
    response.reason = reason
    response.text = text
    response.encoding = "utf-8"
    response.headers = {"Content-Type": content_type} if content_type else {}
    return response


@pytest.fixture
def session():
    http = MagicMock()
    http.get.return_value = make_response()
    return http
