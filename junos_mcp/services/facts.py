"""Device fact retrieval."""

import logging

from junos_mcp.errors import DeviceError, ReplyParseError
from junos_mcp.models import DeviceEndpoint, DeviceFacts
from junos_mcp.services.executor import execute_command
from junos_mcp.utils.reply import find_reply, node_text, parse_reply

logger = logging.getLogger(__name__)

FACTS_COMMAND = "show system information | display xml"

# DeviceFacts attribute -> system-information element
FACT_FIELDS = {
    "hardware_model": "hardware-model",
    "os_name": "os-name",
    "os_version": "os-version",
    "serial_number": "serial-number",
    "host_name": "host-name",
}


def parse_system_information(output: str) -> DeviceFacts:
    """Build DeviceFacts from `show system information | display xml` output.

    Raises:
        ReplyParseError: If the XML is malformed or any field is missing.
    """
    reply = parse_reply(find_reply(output) or output)

    try:
        info = reply["rpc-reply"]["system-information"][0]
        values = {
            attr: node_text(info[tag][0]) for attr, tag in FACT_FIELDS.items()
        }
    except (KeyError, IndexError, TypeError) as e:
        raise ReplyParseError(f"system-information reply is missing {e}") from e

    return DeviceFacts(**values)


async def get_device_facts(
    endpoint: DeviceEndpoint,
    timeout: float = 5.0,
    *,
    known_hosts: str | None = None,
) -> DeviceFacts:
    """Retrieve model, OS, serial number and host name from a device.

    Raises:
        DeviceError: If the command failed; ``.result`` is the executor's
            CommandResult unchanged.
        ReplyParseError: If the reply lacks any of the five fields.
    """
    result = await execute_command(
        endpoint, FACTS_COMMAND, timeout, known_hosts=known_hosts
    )
    if not result.success:
        raise DeviceError.from_result(result)

    try:
        facts = parse_system_information(result.data)
    except ReplyParseError as e:
        logger.error("Cannot parse facts from %s: %s", endpoint.label, e)
        raise

    logger.info(
        "Facts from %s: %s %s %s",
        endpoint.label,
        facts.host_name,
        facts.hardware_model,
        facts.os_version,
    )
    return facts
