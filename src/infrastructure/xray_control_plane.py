"""gRPC adapter for the Xray administrative API."""

import grpc

from src.application.ports.control_plane import (
    ControlPlaneError,
    ControlPlanePort,
)
from src.domain.models.accounts import ProxyAccount
from src.infrastructure import xray_protos


class XrayControlPlaneClient(ControlPlanePort):
    """Control plane backed by Xray's HandlerService and StatsService.

    A single channel is shared by every call. Each call carries its own
    deadline; transport errors and expired deadlines surface as
    ControlPlaneError.
    """

    def __init__(
        self,
        channel: grpc.Channel,
        cipher: str = "aes-128-gcm",
        timeout_seconds: float | None = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            channel: Open gRPC channel to the Xray API listener.
            cipher: Shadowsocks cipher installed with every account.
            timeout_seconds: Deadline applied to each call.
        """
        self._channel = channel
        self._cipher_type = xray_protos.cipher_type_for(cipher)
        self._timeout = timeout_seconds
        self._handler = xray_protos.HandlerServiceStub(channel)
        self._stats = xray_protos.StatsServiceStub(channel)

    @classmethod
    def connect(
        cls,
        target: str,
        cipher: str = "aes-128-gcm",
        timeout_seconds: float | None = 10.0,
    ) -> "XrayControlPlaneClient":
        """Open an insecure channel to the API listener and wrap it.

        Args:
            target: ``host:port`` of the Xray API listener.
            cipher: Shadowsocks cipher installed with every account.
            timeout_seconds: Deadline applied to each call.

        Returns:
            XrayControlPlaneClient: Client owning the new channel.
        """
        return cls(
            grpc.insecure_channel(target),
            cipher=cipher,
            timeout_seconds=timeout_seconds,
        )

    def add_account(self, account: ProxyAccount) -> None:
        operation = xray_protos.AddUserOperation(
            user=xray_protos.User(
                level=account.level,
                email=account.email,
                account=xray_protos.to_typed_message(
                    xray_protos.ShadowsocksAccount(
                        password=account.password,
                        cipher_type=self._cipher_type,
                    )
                ),
            )
        )
        self._alter(account.inbound_tag, operation, "add user", account.email)

    def remove_account(self, email: str, inbound_tag: str) -> None:
        operation = xray_protos.RemoveUserOperation(email=email)
        self._alter(inbound_tag, operation, "remove user", email)

    def query_counter(self, name: str, reset: bool) -> int | None:
        """Read a counter through QueryStats.

        QueryStats matches by substring, so the stat carrying exactly the
        requested name is preferred over other matches.

        Returns:
            int | None: Counter value, or None when Xray reports no stat.
        """
        response = self._call(
            self._stats.QueryStats,
            xray_protos.QueryStatsRequest(pattern=name, reset=reset),
            f"query counter {name}",
        )
        stats = list(response.stat)
        if not stats:
            return None
        for stat in stats:
            if stat.name == name:
                return stat.value
        return stats[0].value

    def ping(self) -> int:
        """Check the API is reachable without resetting any counter.

        Returns:
            int: Number of counters currently exposed by Xray.
        """
        response = self._call(
            self._stats.QueryStats,
            xray_protos.QueryStatsRequest(pattern="", reset=False),
            "query stats",
        )
        return len(response.stat)

    def wait_until_ready(self, timeout_seconds: float | None = None) -> None:
        """Block until the channel is connected.

        Raises:
            ControlPlaneError: If the channel is not ready within the timeout.
        """
        try:
            grpc.channel_ready_future(self._channel).result(
                timeout=timeout_seconds
            )
        except grpc.FutureTimeoutError as exc:
            raise ControlPlaneError(
                f"Xray API not reachable within {timeout_seconds}s"
            ) from exc

    def close(self) -> None:
        self._channel.close()

    def _alter(self, tag: str, operation, action: str, email: str) -> None:
        request = xray_protos.AlterInboundRequest(
            tag=tag,
            operation=xray_protos.to_typed_message(operation),
        )
        self._call(
            self._handler.AlterInbound,
            request,
            f"{action} {email} on {tag}",
        )

    def _call(self, method, request, description: str):
        try:
            return method(request, timeout=self._timeout)
        except grpc.RpcError as exc:
            raise ControlPlaneError(
                f"Failed to {description}: {self._describe(exc)}"
            ) from exc

    @staticmethod
    def _describe(exc: grpc.RpcError) -> str:
        code = getattr(exc, "code", None)
        details = getattr(exc, "details", None)
        if callable(code) and callable(details):
            return f"{code()}: {details()}"
        return str(exc)


__all__ = ["XrayControlPlaneClient"]
