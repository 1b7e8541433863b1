"""The built-in block table loaded into every default registry."""

from __future__ import annotations

from block_workflows.blocks.registry import Block

_PLAIN_TEXT_ONLY = "without any JSON formatting."

SUMMARIZE_TEXT = Block(
    id="summarizeText",
    name="summarizeText",
    description="Condense text to key points",
    prompt_template=(
        "You are a summarization assistant. Provide a concise summary of the following text, "
        "highlighting the main points in clear, readable format. "
        f"Return only the summary text {_PLAIN_TEXT_ONLY}"
    ),
    sample_input=(
        "Artificial intelligence has transformed the way we interact with technology in our "
        "daily lives. From voice assistants like Siri and Alexa to recommendation systems on "
        "Netflix and Spotify, AI is everywhere. Machine learning algorithms analyze vast amounts "
        "of data to identify patterns and make predictions, enabling personalized experiences "
        "for users. Natural language processing allows computers to understand and generate "
        "human language, making chatbots and virtual assistants more conversational and "
        "helpful. Computer vision enables machines to interpret and understand visual "
        "information from the world, powering applications like facial recognition and "
        "autonomous vehicles. Deep learning, a subset of machine learning inspired by the "
        "structure of the human brain, has achieved remarkable breakthroughs in image "
        "recognition, speech recognition, and game playing."
    ),
)

EXTRACT_KEY_POINTS = Block(
    id="extractKeyPoints",
    name="extractKeyPoints",
    description="Identify and list main ideas",
    prompt_template=(
        "You are a key point extraction assistant. Identify and list the main ideas from the "
        "following text as clear bullet points. "
        f"Return only the bullet points {_PLAIN_TEXT_ONLY}"
    ),
    sample_input=(
        "In our quarterly meeting, we discussed several important topics. First, the sales team "
        "reported a 15% increase in revenue compared to last quarter, primarily driven by new "
        "customer acquisitions in the enterprise segment. Second, the product team announced "
        "the upcoming launch of three new features based on customer feedback, scheduled for "
        "release in the next sprint. Third, we reviewed the customer satisfaction scores which "
        "showed improvement in support response times but identified areas for improvement in "
        "product documentation. Fourth, the marketing team presented their campaign results "
        "showing strong engagement on social media platforms."
    ),
)

IMPROVE_WRITING_QUALITY = Block(
    id="improveWritingQuality",
    name="improveWritingQuality",
    description="Enhance clarity, grammar, and style",
    prompt_template=(
        "You are a writing improvement assistant. Enhance the following text by improving "
        "clarity, fixing grammar errors, and refining style while maintaining the original "
        f"meaning. Return only the improved text {_PLAIN_TEXT_ONLY}"
    ),
    sample_input=(
        "The company are planning to launch there new product next month but their still "
        "working on final testing. Its been a long development process with many challenge but "
        "the team is very excited about the results. We believes this product will be game "
        "changer in the market and help us to compete better with our competitor."
    ),
)

REWRITE_AS_EMAIL = Block(
    id="rewriteAsEmail",
    name="rewriteAsEmail",
    description="Convert text to professional email format",
    prompt_template=(
        "You are an email writing assistant. Convert the following text into a professional "
        "email format with appropriate greeting, body, and closing. "
        f"Return only the email text {_PLAIN_TEXT_ONLY}"
    ),
    sample_input=(
        "Hey, just wanted to let you know the project deadline got moved up to next Friday. We "
        "need to finish the design mockups and get feedback from the client before then. Can "
        "you prioritize this? Also the budget discussion needs to happen this week."
    ),
)

TRANSLATE_TEXT = Block(
    id="translateText",
    name="translateText",
    description="Convert text between languages",
    prompt_template=(
        "You are a translation assistant. Translate the following text to Spanish. Maintain the "
        "tone and meaning of the original text. "
        f"Return only the translated text {_PLAIN_TEXT_ONLY}"
    ),
    sample_input=(
        "Welcome to our platform! We are excited to have you here. Our mission is to make "
        "technology accessible to everyone. Whether you are a beginner or an expert, we have "
        "tools and resources to help you succeed."
    ),
)

CONVERT_TO_TABLE = Block(
    id="convertToTable",
    name="convertToTable",
    description="Structure text data as tabular format",
    prompt_template=(
        "You are a data structuring assistant. Convert the following text into a "
        "well-formatted markdown table. Identify the appropriate columns and organize the "
        f"information clearly. Return only the markdown table {_PLAIN_TEXT_ONLY}"
    ),
    sample_input=(
        "Product: Laptop, Price: $999, Stock: 15 units, Category: Electronics. "
        "Product: Desk Chair, Price: $299, Stock: 8 units, Category: Furniture. "
        "Product: Monitor, Price: $449, Stock: 22 units, Category: Electronics."
    ),
)

DEFAULT_BLOCKS: tuple[Block, ...] = (
    SUMMARIZE_TEXT,
    EXTRACT_KEY_POINTS,
    IMPROVE_WRITING_QUALITY,
    REWRITE_AS_EMAIL,
    TRANSLATE_TEXT,
    CONVERT_TO_TABLE,
)
