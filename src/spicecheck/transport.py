"""SpiceDB transport backed by the authzed gRPC client.

Each check is started as a non-blocking unary call; grpc reports completion
through a done-callback run on one of its own threads.
"""

from typing import TYPE_CHECKING

import grpc
import structlog
from authzed.api import v1
from grpcutil import bearer_token_credentials, insecure_bearer_token_credentials

from spicecheck.dispatch import CancelCall, ReplyCallback
from spicecheck.schemas import CheckRequest, ObjectReference


if TYPE_CHECKING:
    from spicecheck.config import Settings


logger = structlog.get_logger()


def to_object_reference(ref: ObjectReference) -> v1.ObjectReference:
    """Convert a reference to its protobuf message."""
    return v1.ObjectReference(object_type=ref.object_type, object_id=ref.object_id)


def to_check_permission_request(request: CheckRequest) -> v1.CheckPermissionRequest:
    """Convert a check request to the CheckPermission protobuf message."""
    return v1.CheckPermissionRequest(
        resource=to_object_reference(request.resource),
        permission=request.permission,
        subject=v1.SubjectReference(object=to_object_reference(request.subject)),
    )


class AuthzedTransport:
    """Submits check requests through an authzed ``SyncClient``.

    The client's channel is safe to share between concurrent checks.
    """

    def __init__(self, client: v1.SyncClient) -> None:
        self.client = client

    @classmethod
    def connect(
        cls,
        endpoint: str,
        token: str,
        insecure: bool = False,
    ) -> "AuthzedTransport":
        """Create a transport for a SpiceDB endpoint.

        Args:
            endpoint: host:port of the SpiceDB gRPC API
            token: Preshared key sent as bearer token
            insecure: Use a plaintext channel (local development only)

        Returns:
            A connected transport
        """
        if insecure:
            credentials = insecure_bearer_token_credentials(token)
        else:
            credentials = bearer_token_credentials(token)

        logger.debug("spicedb_client_created", endpoint=endpoint, insecure=insecure)
        return cls(v1.SyncClient(endpoint, credentials))

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AuthzedTransport":
        """Create a transport from application settings."""
        return cls.connect(
            settings.endpoint,
            settings.token.get_secret_value(),
            insecure=settings.insecure,
        )

    def submit(self, request: CheckRequest, callback: ReplyCallback) -> CancelCall:
        """Start a CheckPermission call.

        Args:
            request: The check to perform
            callback: Receives (error, permissionship) when the call completes

        Returns:
            The call's cancel function
        """
        call = self.client.CheckPermission.future(to_check_permission_request(request))

        def on_done(completed: grpc.Future) -> None:
            if completed.cancelled():
                callback(grpc.FutureCancelledError(), None)
                return

            error = completed.exception()
            if error is not None:
                callback(error, None)
                return

            callback(None, completed.result().permissionship)

        call.add_done_callback(on_done)
        return call.cancel

    def close(self) -> None:
        """Close the client's gRPC channel."""
        channel = getattr(self.client, "_channel", None)
        if channel is not None:
            channel.close()
