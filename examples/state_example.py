"""Example: Read and write the persisted UI state file."""

import asyncio
import json

from desk_commands import read_data_file, resolve_app_data_dir, write_data_file


async def main():
    """Load the state, bump a counter, and save it back."""

    def app_data_dir():
        return resolve_app_data_dir("com.desk.app")

    raw = await read_data_file(app_data_dir)
    state = json.loads(raw)
    print(f"Loaded state: {raw}")

    state["launches"] = state.get("launches", 0) + 1
    await write_data_file(json.dumps(state, indent=2), app_data_dir)
    print(f"Saved to {app_data_dir() / 'state.json'}")


if __name__ == "__main__":
    asyncio.run(main())
