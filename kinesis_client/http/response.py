import json
from typing import Any, Optional

from werkzeug.wrappers import Response as WerkzeugResponse

from kinesis_client.utils.json import CustomEncoder


class Response(WerkzeugResponse):
    """
    An HTTP Response object, which simply extends werkzeug's Response object with a few convenience methods.
    """

    def set_json(self, doc: Any):
        """
        Serializes the given dictionary using our ``CustomEncoder`` into a json response, and sets the mimetype
        automatically to ``application/json``.

        :param doc: the response dictionary to be serialized as JSON
        """
        self.data = json.dumps(doc, cls=CustomEncoder)
        self.mimetype = "application/json"

    def get_json_body(self) -> Optional[Any]:
        """
        Returns the body parsed as JSON, regardless of the mimetype of the response. An empty body is returned as
        None. Invalid JSON raises a ``ValueError``.
        """
        data = self.get_data()
        if not data:
            return None
        return json.loads(data)

    @classmethod
    def for_json(cls, doc: Any, *args, **kwargs) -> "Response":
        """
        Creates a new JSON response from the given document. It automatically sets the mimetype to ``application/json``.

        :param doc: the document to serialize into JSON
        :param args: arguments passed to the ``Response`` constructor
        :param kwargs: keyword arguments passed to the ``Response`` constructor
        :return: a new Response object
        """
        response = cls(*args, **kwargs)
        response.set_json(doc)
        return response
