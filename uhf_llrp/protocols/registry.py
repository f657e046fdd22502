# uhf_llrp/protocols/registry.py

from typing import Dict, Type, Optional, List, Tuple
import logging

from uhf_llrp.core.exceptions import RegistryError, ParameterParseError
from uhf_llrp.protocols.llrp import codec
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import Message, UnknownMessage, STANDARD_MESSAGES, IMPINJ_MESSAGES
from uhf_llrp.protocols.llrp.parameters import (
    Parameter, UnknownParameter, TVField, EPC96, STANDARD_PARAMETERS, IMPINJ_PARAMETERS,
)

logger = logging.getLogger(__name__)

TypeKey = Tuple[int, Optional[int], Optional[int]]


class TypeRegistry:
    """
    Maps LLRP type codes to the message and parameter classes that decode them.

    Standard types are keyed by (type, None, None), vendor extensions by
    (1023, vendor, subtype). Types that are not enrolled still decode, as
    UnknownMessage / UnknownParameter, so a reader that sends more than we
    understand does not break the session.
    """

    def __init__(self, name: str = "LLRP"):
        self.name = name
        self._messages: Dict[TypeKey, Type[Message]] = {}
        self._parameters: Dict[TypeKey, Type[Parameter]] = {}

    def register_message(self, message_class: Type[Message]) -> None:
        """
        Enrolls a message class under its type key.

        Raises:
            RegistryError: If message_class is not a Message subclass.
        """
        if not isinstance(message_class, type) or not issubclass(message_class, Message):
            raise RegistryError(f"message_class must be a subclass of Message, got {message_class}")
        key = message_class.type_key()
        if key in self._messages:
            logger.warning(f"Message type {key} is already registered in '{self.name}'. Overwriting with {message_class.__name__}.")
        self._messages[key] = message_class

    def register_parameter(self, parameter_class: Type[Parameter]) -> None:
        """
        Enrolls a parameter class under its type key.

        Raises:
            RegistryError: If parameter_class is not a Parameter subclass.
        """
        if not isinstance(parameter_class, type) or not issubclass(parameter_class, Parameter):
            raise RegistryError(f"parameter_class must be a subclass of Parameter, got {parameter_class}")
        key = parameter_class.type_key()
        if key in self._parameters:
            logger.warning(f"Parameter type {key} is already registered in '{self.name}'. Overwriting with {parameter_class.__name__}.")
        self._parameters[key] = parameter_class

    def get_message_class(self, message_type: int, vendor: Optional[int] = None, subtype: Optional[int] = None) -> Optional[Type[Message]]:
        return self._messages.get((message_type, vendor, subtype))

    def get_parameter_class(self, param_type: int, vendor: Optional[int] = None, subtype: Optional[int] = None) -> Optional[Type[Parameter]]:
        return self._parameters.get((param_type, vendor, subtype))

    def list_types(self) -> List[str]:
        """Returns the names of all enrolled messages and parameters."""
        return sorted(cls.NAME for cls in list(self._messages.values()) + list(self._parameters.values()))

    # --- Decoding ---

    def decode_message(self, message_type: int, message_id: int, payload: bytes) -> Message:
        """
        Decodes a message body into its Message class.

        Raises:
            ParameterParseError: If the body does not match the message layout.
        """
        vendor = subtype = None
        body = payload
        if message_type == llrp_const.MSG_CUSTOM_MESSAGE:
            vendor, subtype = codec.unpack_from(llrp_const.CUSTOM_MESSAGE_HEADER_FORMAT, payload, 0, "custom message header")
            body = payload[5:]

        message_class = self.get_message_class(message_type, vendor, subtype)
        if message_class is None:
            logger.debug(f"No class registered for message {(message_type, vendor, subtype)}, keeping raw body.")
            return UnknownMessage(message_id=message_id, message_type=message_type,
                                  vendor=vendor, subtype=subtype, body=bytes(body))
        try:
            return message_class.decode_body(message_id, body, self)
        except ParameterParseError as e:
            if e.ref_type is None:
                e.ref_type = message_class.NAME
            raise

    def decode_parameters(self, data: bytes) -> List[Parameter]:
        """
        Decodes a sequence of parameters, in wire order.

        Raises:
            ParameterParseError: On malformed parameter data.
        """
        params: List[Parameter] = []
        for raw in codec.iter_parameters(data):
            if raw.is_tv:
                if raw.param_type == llrp_const.TV_EPC_96:
                    params.append(EPC96(epc=raw.body))
                else:
                    params.append(TVField.from_tv(raw.param_type, raw.body))
                continue

            parameter_class = self.get_parameter_class(*raw.key)
            if parameter_class is None:
                params.append(UnknownParameter(param_type=raw.param_type, vendor=raw.vendor,
                                               subtype=raw.subtype, body=raw.body))
                continue
            try:
                params.append(parameter_class.decode_body(raw.body, self))
            except ParameterParseError as e:
                if e.ref_type is None:
                    e.ref_type = parameter_class.NAME
                raise
        return params


def get_the_type_registry() -> TypeRegistry:
    """Creates a registry with the standard LLRP messages and parameters enrolled."""
    registry = TypeRegistry()
    for message_class in STANDARD_MESSAGES:
        registry.register_message(message_class)
    for parameter_class in STANDARD_PARAMETERS:
        registry.register_parameter(parameter_class)
    logger.debug(f"Type registry created with {len(registry.list_types())} standard types.")
    return registry


def enroll_impinj_types(registry: TypeRegistry) -> TypeRegistry:
    """Adds the Impinj vendor extensions to an existing registry."""
    for message_class in IMPINJ_MESSAGES:
        registry.register_message(message_class)
    for parameter_class in IMPINJ_PARAMETERS:
        registry.register_parameter(parameter_class)
    return registry
