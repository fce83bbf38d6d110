from zxpico.settings import JoystickMode, Settings, SettingValues


class _Stored(Settings):
    def __init__(self, volume, mode):
        self.volume = volume
        self.mode = mode
        self.saved = None

    def on_load(self, values):
        values.volume = self.volume
        values.joystick_mode = self.mode
        return True

    def on_save(self, values):
        self.saved = SettingValues(values.volume, values.joystick_mode)
        return True


def test_defaults():
    values = Settings().defaults()
    assert values.volume == 0x100
    assert values.joystick_mode is JoystickMode.KEMPSTON


def test_sanitise_clamps_volume():
    values = Settings().sanitise(SettingValues(volume=0x300))
    assert values.volume == 0x100


def test_sanitise_keeps_valid_values():
    values = Settings().sanitise(SettingValues(volume=0x40, joystick_mode=2))
    assert values.volume == 0x40
    assert values.joystick_mode is JoystickMode.SINCLAIR_RL


def test_sanitise_replaces_unknown_joystick_mode():
    values = Settings().sanitise(SettingValues(joystick_mode=99))
    assert values.joystick_mode is JoystickMode.KEMPSTON


def test_base_store_load_gives_defaults():
    settings = Settings()
    values, loaded = settings.load()
    assert loaded is False
    assert values == settings.defaults()


def test_base_store_save_reports_failure():
    assert Settings().save(SettingValues()) is False


def test_loaded_values_are_sanitised():
    store = _Stored(0x999, 7)
    values, loaded = store.load()
    assert loaded is True
    assert values.volume == 0x100
    assert values.joystick_mode is JoystickMode.KEMPSTON
    assert values == Settings().defaults()


def test_saved_values_are_sanitised_first():
    store = _Stored(0, 0)
    assert store.save(SettingValues(volume=0x200, joystick_mode=JoystickMode.SINCLAIR_LR))
    assert store.saved == SettingValues(0x100, JoystickMode.SINCLAIR_LR)