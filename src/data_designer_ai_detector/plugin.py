from data_designer.plugins.plugin import Plugin, PluginType

ai_detector_plugin = Plugin(
    config_qualified_name="data_designer_ai_detector.config.AIDetectorColumnConfig",
    impl_qualified_name="data_designer_ai_detector.generator.AIDetectorColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
