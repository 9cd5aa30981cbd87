"""Editor type identifiers with a built-in parser."""

CONTENT_PICKER = "Umbraco.ContentPicker"
MEDIA_PICKER = "Umbraco.MediaPicker3"
TAGS = "Umbraco.Tags"
MULTIPLE_TEXTSTRING = "Umbraco.MultipleTextstring"
CHECKBOX_LIST = "Umbraco.CheckBoxList"
DROPDOWN_LIST = "Umbraco.DropDown.Flexible"
COLOR_PICKER = "Umbraco.ColorPicker"
SLIDER = "Umbraco.Slider"
INTEGER = "Umbraco.Integer"
DECIMAL = "Umbraco.Decimal"
DATETIME = "Umbraco.DateTime"
BOOLEAN = "Umbraco.TrueFalse"
MULTI_NODE_TREE_PICKER = "Umbraco.MultiNodeTreePicker"
MULTI_URL_PICKER = "Umbraco.MultiUrlPicker"
MARKDOWN = "Umbraco.MarkdownEditor"
IMAGE_CROPPER = "Umbraco.ImageCropper"
RICH_TEXT = "Umbraco.RichText"
