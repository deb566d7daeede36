"""
Standard API response helpers.

Provides the success envelope and conversion of raw MongoDB documents
into JSON-safe dictionaries.

Example:
    from common.utils import success_response, serialize_document

    @app.get("/students/{id}")
    async def get_student(id: str):
        student = await students.find_one({"_id": ObjectId(id)})
        return serialize_document(student)
"""

from typing import Any, Optional, Dict

from bson import ObjectId
from fastapi.encoders import jsonable_encoder


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def serialize_document(document: Any) -> Any:
    """
    Convert a MongoDB document (or list of them) into JSON-safe data.

    ObjectIds become strings and datetimes ISO-8601 strings; nested
    documents and arrays are converted recursively.
    """
    return jsonable_encoder(document, custom_encoder={ObjectId: str})
