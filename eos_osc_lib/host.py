"""
OSC Host

Standalone host for running an EosSession outside a control-surface app.
Provides everything HostInterface asks for:
- UDP client for sending (python-osc SimpleUDPClient)
- Blocking UDP server in a background thread for receiving
- Pattern registration with one-segment `*` wildcards
- Parameter store with change notification
- Output value store with change notification

Inbound dispatch and parameter notifications are serialized by one lock,
so session callbacks never run concurrently. Transport restarts happen
outside that lock because server shutdown waits for in-flight dispatch.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pythonosc import dispatcher, udp_client, osc_server

from .decoder import address_matches
from .model import SessionConfig
from .profiles import DEFAULT_PARAMETERS, ENDPOINT_PARAMETERS

logger = logging.getLogger(__name__)

Handler = Callable[[str, List[Any]], None]
ChangeListener = Callable[[str, Any], None]


class OscHost:
    """
    python-osc backed host.

    Example:
        host = OscHost({"remoteHost": "10.0.0.2", "remotePort": 8000})
        session = EosSession(host)
        host.add_parameter_listener(session.on_parameter_changed)
        host.start()
        session.start()
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None, bind_host: str = "0.0.0.0"):
        self._parameters: Dict[str, Any] = dict(DEFAULT_PARAMETERS)
        if parameters:
            self._parameters.update(parameters)
        self.bind_host = bind_host

        self._values: Dict[str, Any] = {}
        self._registrations: List[Tuple[str, Handler]] = []
        self._parameter_listeners: List[ChangeListener] = []
        self._value_listeners: List[ChangeListener] = []

        self._client: Any = None
        self._server: Any = None
        self._server_thread: Optional[threading.Thread] = None
        self._lock = threading.RLock()
        self._transport_lock = threading.Lock()
        self._running = False
        self._receive = True

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def config(self) -> SessionConfig:
        return SessionConfig.from_parameters(self._parameters)

    def start(self, receive: bool = True) -> bool:
        """
        Start OSC client and, when receiving, the server.

        Args:
            receive: Bind localPort and dispatch inbound messages. One-shot
                senders pass False so they never compete for the port.

        Returns:
            True if started successfully
        """
        config = self.config
        self._receive = receive
        try:
            self._client = udp_client.SimpleUDPClient(config.send_host, config.remote_port)

            if not receive:
                self._running = True
                logger.info(f"OSC started: send={config.send_host}:{config.remote_port}")
                return True

            disp = dispatcher.Dispatcher()
            disp.set_default_handler(self._handle_message)

            self._server = osc_server.BlockingOSCUDPServer(
                (self.bind_host, config.local_port),
                disp
            )
            self._server_thread = threading.Thread(
                target=self._server.serve_forever,
                name="EosOscServer",
                daemon=True
            )
            self._server_thread.start()
            self._running = True

            logger.info(
                f"OSC started: send={config.send_host}:{config.remote_port}, "
                f"receive={config.local_port}"
            )
            return True

        except OSError as e:
            logger.error(f"OSC start failed: {e}")
            self._client = None
            self._server = None
            return False

    def stop(self):
        """Stop OSC server and client."""
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._server_thread:
            self._server_thread.join(timeout=1.0)
            self._server_thread = None

        self._client = None
        if self._running:
            logger.info("OSC stopped")
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def reconfigure(self) -> bool:
        """Rebuild client and server from the current endpoint parameters."""
        logger.info("Endpoint parameters changed, restarting OSC")
        with self._transport_lock:
            self.stop()
            return self.start(self._receive)

    # =========================================================================
    # HostInterface
    # =========================================================================

    def register(self, pattern: str, handler: Handler) -> None:
        with self._lock:
            if (pattern, handler) not in self._registrations:
                self._registrations.append((pattern, handler))
        logger.debug(f"Registered {pattern}")

    def send(self, address: str, *args: Any) -> None:
        if not self._client:
            logger.debug(f"OSC not connected, cannot send: {address}")
            return

        try:
            self._client.send_message(address, list(args))
            logger.debug(f"OSC sent: {address} {list(args)}")
        except OSError as e:
            logger.error(f"Failed to send OSC: {e}")

    def matches(self, address: str, pattern: str) -> bool:
        return address_matches(address, pattern)

    def get_parameter(self, name: str) -> Any:
        return self._parameters.get(name)

    def set_value(self, name: str, value: Any) -> None:
        self._values[name] = value
        for listener in list(self._value_listeners):
            listener(name, value)

    def get_value(self, name: str) -> Any:
        return self._values.get(name)

    # =========================================================================
    # PARAMETERS
    # =========================================================================

    def set_parameter(self, name: str, value: Any) -> None:
        """
        Change a parameter and notify listeners.

        Endpoint changes restart the transport while running.
        """
        with self._lock:
            if self._parameters.get(name) == value:
                return
            self._parameters[name] = value
            restart = name in ENDPOINT_PARAMETERS and self._running

        if restart:
            self.reconfigure()

        with self._lock:
            for listener in list(self._parameter_listeners):
                listener(name, value)

    def add_parameter_listener(self, listener: ChangeListener) -> None:
        if listener not in self._parameter_listeners:
            self._parameter_listeners.append(listener)

    def add_value_listener(self, listener: ChangeListener) -> None:
        if listener not in self._value_listeners:
            self._value_listeners.append(listener)

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def _handle_message(self, address: str, *args):
        """Handle incoming OSC message from the server thread."""
        self.dispatch(address, list(args))

    def dispatch(self, address: str, args: List[Any]) -> None:
        """Call every handler registered for a matching pattern, once each."""
        with self._lock:
            called: List[Handler] = []
            for pattern, handler in self._registrations:
                if handler in called or not address_matches(address, pattern):
                    continue
                called.append(handler)
                try:
                    handler(address, args)
                except Exception as e:
                    logger.error(f"Error in handler for {address}: {e}")
