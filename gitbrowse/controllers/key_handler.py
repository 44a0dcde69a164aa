"""
Key handling functionality
"""
import curses

KEY_ESC = 27
KEY_ENTER = 10
KEY_TAB = 9


def curses_ctrl(key):
    return ord(key) & 0x1F


class KeyHandler:
    """Maps key names from the configuration to curses key codes"""

    _named_keys = {
        'UP': curses.KEY_UP,
        'DOWN': curses.KEY_DOWN,
        'LEFT': curses.KEY_LEFT,
        'RIGHT': curses.KEY_RIGHT,
        'PgUp': curses.KEY_PPAGE,
        'PgDn': curses.KEY_NPAGE,
        'HOME': curses.KEY_HOME,
        'END': curses.KEY_END,
        'ENTER': KEY_ENTER,
        'ESC': KEY_ESC,
        'Tab': KEY_TAB,
        'RESIZE': curses.KEY_RESIZE,
    }

    @staticmethod
    def get_key_code(key_name):
        """
        Get the key code for a key name

        Args:
            key_name (str): 'UP', 'PgDn', 'Ctrl-f', or a single character

        Returns:
            int: Key code, None for unknown names
        """
        if key_name in KeyHandler._named_keys:
            return KeyHandler._named_keys[key_name]
        if key_name.startswith('Ctrl-') and len(key_name) == 6:
            return curses_ctrl(key_name[5])
        if len(key_name) == 1:
            return ord(key_name)
        return None

    @staticmethod
    def resolve_bindings(bindings, actions):
        """
        Build a key code -> action table

        Args:
            bindings (dict): Action name -> list of key names
            actions (dict): Action name -> callable, names missing here are skipped

        Returns:
            dict: Key code -> callable

        Raises:
            ValueError: For key names that have no key code
        """
        table = {}
        for action_name, key_names in bindings.items():
            if action_name not in actions:
                continue
            for key_name in key_names:
                key_code = KeyHandler.get_key_code(key_name)
                if key_code is None:
                    raise ValueError(f"Unknown key '{key_name}' bound to '{action_name}'")
                table[key_code] = actions[action_name]
        return table

    @staticmethod
    def get_key_descriptions(bindings):
        """
        Short help text for the status bar

        Args:
            bindings (dict): Action name -> list of key names

        Returns:
            dict: 'UP/k' style key list -> action name, actions without keys are left out
        """
        return {'/'.join(key_names): action_name.replace('_', ' ')
                for action_name, key_names in bindings.items() if key_names}
